"""Rendition profiles and the static catalog they live in."""

from collections.abc import Iterable, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field

from hls_ingest.domain.exceptions import UnknownProfileException


class RenditionProfile(BaseModel):
    """Target configuration for one HLS rendition. Immutable."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        pattern=r"^[A-Za-z0-9_-]+$",
        description="Quality tier name, also the output subdirectory",
    )
    height: int = Field(gt=0, le=4320, description="Target vertical resolution")
    video_bitrate: str = Field(
        pattern=r"^\d+[kKmM]?$",
        description="ffmpeg video bitrate, e.g. 800k",
    )
    audio_bitrate: str = Field(
        pattern=r"^\d+[kKmM]?$",
        description="ffmpeg audio bitrate, e.g. 96k",
    )


DEFAULT_PROFILES: tuple[RenditionProfile, ...] = (
    RenditionProfile(name="144p", height=144, video_bitrate="400k", audio_bitrate="64k"),
    RenditionProfile(name="360p", height=360, video_bitrate="800k", audio_bitrate="96k"),
    RenditionProfile(name="480p", height=480, video_bitrate="1400k", audio_bitrate="128k"),
    RenditionProfile(name="720p", height=720, video_bitrate="2800k", audio_bitrate="128k"),
    RenditionProfile(name="1080p", height=1080, video_bitrate="5000k", audio_bitrate="192k"),
)


class ProfileCatalog(Mapping[str, RenditionProfile]):
    """Read-only name -> profile table, fixed at process start."""

    def __init__(self, profiles: Iterable[RenditionProfile] = DEFAULT_PROFILES) -> None:
        table: dict[str, RenditionProfile] = {}
        for profile in profiles:
            if profile.name in table:
                raise ValueError(f"Duplicate rendition profile: {profile.name}")
            table[profile.name] = profile
        self._profiles = table

    def __getitem__(self, name: str) -> RenditionProfile:
        return self._profiles[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def select(self, names: Iterable[str] | None = None) -> list[RenditionProfile]:
        """Return the named profiles in catalog order, or all when ``names`` is None.

        Raises:
            UnknownProfileException: If a name is not in the catalog.
        """
        if names is None:
            return list(self._profiles.values())
        wanted = set(names)
        unknown = sorted(wanted - self._profiles.keys())
        if unknown:
            raise UnknownProfileException(unknown[0])
        return [p for p in self._profiles.values() if p.name in wanted]
