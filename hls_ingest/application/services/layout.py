"""On-disk layout of rendition outputs and the locators they are served at."""

from pathlib import Path

PLAYLIST_NAME = "index.m3u8"
SEGMENT_PATTERN = "segment%03d.ts"


class OutputLayout:
    """Maps an asset to its private namespace under the output root.

    ``<root>/<asset_id>/<profile>/index.m3u8`` for renditions and
    ``<root>/<asset_id>/<thumbnail_name>`` for the preview, so two assets
    never share a path.
    """

    def __init__(
        self,
        output_root: Path,
        public_base_url: str,
        mount_path: str = "/hls-output",
        thumbnail_name: str = "thumbnail.jpg",
    ) -> None:
        self.output_root = Path(output_root)
        self._base_url = public_base_url.rstrip("/")
        self._mount_path = "/" + mount_path.strip("/")
        self._thumbnail_name = thumbnail_name

    def namespace(self, asset_id: str) -> Path:
        return self.output_root / asset_id

    def rendition_dir(self, asset_id: str, profile_name: str) -> Path:
        return self.namespace(asset_id) / profile_name

    def playlist_path(self, asset_id: str, profile_name: str) -> Path:
        return self.rendition_dir(asset_id, profile_name) / PLAYLIST_NAME

    def thumbnail_path(self, asset_id: str) -> Path:
        return self.namespace(asset_id) / self._thumbnail_name

    def locator_for(self, path: Path) -> str:
        """Public URL for a file inside the output root.

        Raises:
            ValueError: If ``path`` is outside the output root.
        """
        relative = Path(path).resolve().relative_to(self.output_root.resolve())
        return f"{self._base_url}{self._mount_path}/{relative.as_posix()}"
