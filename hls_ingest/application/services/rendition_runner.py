"""Runs one HLS encode for a single (asset, profile) pair."""

from collections.abc import Callable
from pathlib import Path

from hls_ingest.application.services.layout import PLAYLIST_NAME, SEGMENT_PATTERN
from hls_ingest.commons.telemetry import get_logger, timed
from hls_ingest.domain.exceptions import JobFailedException
from hls_ingest.domain.models.outcome import RenditionJobOutcome
from hls_ingest.domain.models.profile import RenditionProfile
from hls_ingest.infrastructure.transcoding.base import ProcessInvokerBase


class RenditionJobRunner:
    """Encodes a source video into one HLS rendition.

    Every failure mode (directory creation, launch error, non-zero exit,
    timeout, missing playlist) becomes a failed outcome; nothing is retried.
    Partially written segments are left for the caller to reclaim.
    """

    def __init__(
        self,
        invoker: ProcessInvokerBase,
        locator: Callable[[Path], str] = str,
        ffmpeg_path: str = "ffmpeg",
        preset: str = "fast",
        segment_seconds: int = 10,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            invoker: Capability that runs the engine process.
            locator: Turns the produced playlist path into a public locator.
            ffmpeg_path: Engine executable.
            preset: x264 preset.
            segment_seconds: Fixed HLS segment duration.
            timeout_seconds: Per-job limit, None for no limit.
        """
        self._invoker = invoker
        self._locator = locator
        self._ffmpeg = ffmpeg_path
        self._preset = preset
        self._segment_seconds = segment_seconds
        self._timeout = timeout_seconds
        self._logger = get_logger(__name__)

    def build_command(
        self,
        source_path: Path,
        output_directory: Path,
        profile: RenditionProfile,
    ) -> list[str]:
        """Build the engine argv for ``profile``. Pure and deterministic."""
        return [
            self._ffmpeg,
            "-y",
            "-i",
            str(source_path),
            "-vf",
            f"scale=-2:{profile.height}",
            "-c:v",
            "libx264",
            "-preset",
            self._preset,
            "-b:v",
            profile.video_bitrate,
            "-c:a",
            "aac",
            "-b:a",
            profile.audio_bitrate,
            "-f",
            "hls",
            "-hls_time",
            str(self._segment_seconds),
            "-hls_playlist_type",
            "vod",
            "-hls_segment_filename",
            str(output_directory / SEGMENT_PATTERN),
            "-start_number",
            "0",
            str(output_directory / PLAYLIST_NAME),
        ]

    @timed
    async def run(
        self,
        source_path: Path,
        output_directory: Path,
        profile: RenditionProfile,
    ) -> RenditionJobOutcome:
        """Encode ``profile`` into ``output_directory``.

        Args:
            source_path: Source video.
            output_directory: Directory unique to this (asset, profile).
            profile: Target rendition profile.

        Returns:
            Succeeded with the playlist locator, or Failed with a cause.
        """
        try:
            output_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return self._failed(profile, f"cannot create output directory: {e}")

        result = await self._invoker.invoke(
            self.build_command(source_path, output_directory, profile),
            timeout_seconds=self._timeout,
        )
        if not result.ok:
            return self._failed(profile, result.describe_failure())

        # An exit status of 0 is not trusted until the playlist is on disk.
        playlist = output_directory / PLAYLIST_NAME
        if not playlist.is_file():
            return self._failed(profile, f"engine exited 0 but {playlist} is missing")

        self._logger.info(
            "Rendition succeeded",
            extra={"profile": profile.name, "playlist": str(playlist)},
        )
        return RenditionJobOutcome.success(profile.name, self._locator(playlist))

    def _failed(self, profile: RenditionProfile, cause: str) -> RenditionJobOutcome:
        error = JobFailedException(profile.name, cause)
        self._logger.warning(
            "Rendition failed",
            extra={"profile": profile.name, "cause": cause},
        )
        return RenditionJobOutcome.failure(profile.name, str(error))
