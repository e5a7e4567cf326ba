"""Captures the preview thumbnail of a source video."""

from collections.abc import Callable
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from hls_ingest.commons.telemetry import get_logger, timed
from hls_ingest.domain.models.outcome import ThumbnailOutcome
from hls_ingest.infrastructure.transcoding.base import ProcessInvokerBase


class ThumbnailJobRunner:
    """Grabs one frame at a fixed offset, scaled to a fixed size."""

    def __init__(
        self,
        invoker: ProcessInvokerBase,
        locator: Callable[[Path], str] = str,
        ffmpeg_path: str = "ffmpeg",
        seek_seconds: float = 2.0,
        size: tuple[int, int] = (320, 180),
        timeout_seconds: float | None = None,
    ) -> None:
        self._invoker = invoker
        self._locator = locator
        self._ffmpeg = ffmpeg_path
        self._seek = seek_seconds
        self._size = size
        self._timeout = timeout_seconds
        self._logger = get_logger(__name__)

    def build_command(self, source_path: Path, output_path: Path) -> list[str]:
        width, height = self._size
        return [
            self._ffmpeg,
            "-y",
            "-ss",
            str(self._seek),
            "-i",
            str(source_path),
            "-frames:v",
            "1",
            "-s",
            f"{width}x{height}",
            str(output_path),
        ]

    @timed
    async def run(self, source_path: Path, output_path: Path) -> ThumbnailOutcome:
        """Capture the thumbnail into ``output_path``."""
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return self._failed(f"cannot create output directory: {e}")

        result = await self._invoker.invoke(
            self.build_command(source_path, output_path),
            timeout_seconds=self._timeout,
        )
        if not result.ok:
            return self._failed(result.describe_failure())

        if not output_path.is_file():
            return self._failed(f"engine exited 0 but {output_path} is missing")
        try:
            with Image.open(output_path) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            return self._failed(f"captured thumbnail is not a valid image: {e}")

        self._logger.info("Thumbnail captured", extra={"thumbnail": str(output_path)})
        return ThumbnailOutcome.success(self._locator(output_path))

    def _failed(self, cause: str) -> ThumbnailOutcome:
        self._logger.warning("Thumbnail capture failed", extra={"cause": cause})
        return ThumbnailOutcome.failure(cause)
