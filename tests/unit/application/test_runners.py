"""Unit tests for the output layout and the rendition/thumbnail job runners."""

from pathlib import Path

import pytest
from PIL import Image

from hls_ingest.application.services import (
    OutputLayout,
    RenditionJobRunner,
    ThumbnailJobRunner,
)
from hls_ingest.domain.models.profile import ProfileCatalog
from hls_ingest.infrastructure.transcoding import ProcessInvokerBase, ProcessResult


class ScriptedInvoker(ProcessInvokerBase):
    """Returns a fixed result and optionally writes the engine's output file."""

    def __init__(self, result=None, write=None):
        self.result = result or ProcessResult(returncode=0)
        self.write = write
        self.calls = []

    async def invoke(self, args, timeout_seconds=None):
        self.calls.append((list(args), timeout_seconds))
        if self.write is not None:
            self.write(Path(args[-1]))
        return self.result

    def is_available(self, executable):
        return True


def write_playlist(path: Path) -> None:
    path.write_text("#EXTM3U\n#EXT-X-ENDLIST\n")


def write_jpeg(path: Path) -> None:
    Image.new("RGB", (320, 180), color=(10, 20, 30)).save(path, "JPEG")


@pytest.fixture
def profile():
    return ProfileCatalog()["360p"]


class TestOutputLayout:
    """Tests for OutputLayout."""

    def test_paths(self, tmp_path):
        layout = OutputLayout(tmp_path, "http://localhost:2000")

        assert layout.namespace("a1") == tmp_path / "a1"
        assert layout.rendition_dir("a1", "720p") == tmp_path / "a1" / "720p"
        assert layout.playlist_path("a1", "720p") == tmp_path / "a1" / "720p" / "index.m3u8"
        assert layout.thumbnail_path("a1") == tmp_path / "a1" / "thumbnail.jpg"

    def test_locator_for(self, tmp_path):
        layout = OutputLayout(tmp_path, "http://cdn.example.com/", mount_path="media/")

        locator = layout.locator_for(layout.playlist_path("a1", "144p"))

        assert locator == "http://cdn.example.com/media/a1/144p/index.m3u8"

    def test_locator_outside_root(self, tmp_path):
        layout = OutputLayout(tmp_path / "out", "http://localhost:2000")
        with pytest.raises(ValueError):
            layout.locator_for(tmp_path / "elsewhere" / "index.m3u8")

    def test_namespaces_are_disjoint(self, tmp_path):
        layout = OutputLayout(tmp_path, "http://localhost:2000")
        first = layout.namespace("a1")
        second = layout.namespace("a2")
        assert first not in second.parents
        assert second not in first.parents


class TestRenditionJobRunner:
    """Tests for RenditionJobRunner."""

    def test_build_command(self, tmp_path, profile):
        runner = RenditionJobRunner(
            ScriptedInvoker(), ffmpeg_path="/usr/bin/ffmpeg", preset="veryfast", segment_seconds=6
        )
        source = tmp_path / "in.mp4"
        outdir = tmp_path / "a1" / "360p"

        assert runner.build_command(source, outdir, profile) == [
            "/usr/bin/ffmpeg",
            "-y",
            "-i",
            str(source),
            "-vf",
            "scale=-2:360",
            "-c:v",
            "libx264",
            "-preset",
            "veryfast",
            "-b:v",
            "800k",
            "-c:a",
            "aac",
            "-b:a",
            "96k",
            "-f",
            "hls",
            "-hls_time",
            "6",
            "-hls_playlist_type",
            "vod",
            "-hls_segment_filename",
            str(outdir / "segment%03d.ts"),
            "-start_number",
            "0",
            str(outdir / "index.m3u8"),
        ]

    async def test_success(self, tmp_path, profile):
        layout = OutputLayout(tmp_path, "http://localhost:2000")
        invoker = ScriptedInvoker(write=write_playlist)
        runner = RenditionJobRunner(invoker, locator=layout.locator_for, timeout_seconds=30)
        outdir = layout.rendition_dir("a1", "360p")

        outcome = await runner.run(tmp_path / "in.mp4", outdir, profile)

        assert outcome.succeeded
        assert outcome.profile_name == "360p"
        assert outcome.locator == "http://localhost:2000/hls-output/a1/360p/index.m3u8"
        assert invoker.calls[0][1] == 30
        assert outdir.is_dir()

    async def test_non_zero_exit(self, tmp_path, profile):
        invoker = ScriptedInvoker(
            result=ProcessResult(returncode=1, stderr_tail="Invalid data found")
        )
        runner = RenditionJobRunner(invoker)

        outcome = await runner.run(tmp_path / "in.mp4", tmp_path / "a1" / "360p", profile)

        assert not outcome.succeeded
        assert "360p" in outcome.error
        assert "Invalid data found" in outcome.error

    async def test_timeout(self, tmp_path, profile):
        runner = RenditionJobRunner(
            ScriptedInvoker(result=ProcessResult(returncode=None, timed_out=True))
        )

        outcome = await runner.run(tmp_path / "in.mp4", tmp_path / "a1" / "360p", profile)

        assert not outcome.succeeded
        assert "timed out" in outcome.error

    async def test_zero_exit_without_playlist_fails(self, tmp_path, profile):
        runner = RenditionJobRunner(ScriptedInvoker())

        outcome = await runner.run(tmp_path / "in.mp4", tmp_path / "a1" / "360p", profile)

        assert not outcome.succeeded
        assert "missing" in outcome.error

    async def test_unwritable_output_directory(self, tmp_path, profile):
        blocker = tmp_path / "a1"
        blocker.write_text("not a directory")
        invoker = ScriptedInvoker()
        runner = RenditionJobRunner(invoker)

        outcome = await runner.run(tmp_path / "in.mp4", blocker / "360p", profile)

        assert not outcome.succeeded
        assert "cannot create output directory" in outcome.error
        assert invoker.calls == []


class TestThumbnailJobRunner:
    """Tests for ThumbnailJobRunner."""

    def test_build_command(self, tmp_path):
        runner = ThumbnailJobRunner(ScriptedInvoker(), seek_seconds=2.0, size=(320, 180))

        command = runner.build_command(tmp_path / "in.mp4", tmp_path / "thumbnail.jpg")

        assert command == [
            "ffmpeg",
            "-y",
            "-ss",
            "2.0",
            "-i",
            str(tmp_path / "in.mp4"),
            "-frames:v",
            "1",
            "-s",
            "320x180",
            str(tmp_path / "thumbnail.jpg"),
        ]

    async def test_success(self, tmp_path):
        layout = OutputLayout(tmp_path, "http://localhost:2000")
        runner = ThumbnailJobRunner(ScriptedInvoker(write=write_jpeg), locator=layout.locator_for)

        outcome = await runner.run(tmp_path / "in.mp4", layout.thumbnail_path("a1"))

        assert outcome.succeeded
        assert outcome.locator == "http://localhost:2000/hls-output/a1/thumbnail.jpg"

    async def test_engine_failure(self, tmp_path):
        runner = ThumbnailJobRunner(ScriptedInvoker(result=ProcessResult(returncode=1)))

        outcome = await runner.run(tmp_path / "in.mp4", tmp_path / "a1" / "thumbnail.jpg")

        assert not outcome.succeeded
        assert "status 1" in outcome.error

    async def test_missing_file(self, tmp_path):
        runner = ThumbnailJobRunner(ScriptedInvoker())

        outcome = await runner.run(tmp_path / "in.mp4", tmp_path / "a1" / "thumbnail.jpg")

        assert not outcome.succeeded
        assert "missing" in outcome.error

    async def test_corrupt_image(self, tmp_path):
        runner = ThumbnailJobRunner(
            ScriptedInvoker(write=lambda p: p.write_bytes(b"definitely not a jpeg"))
        )

        outcome = await runner.run(tmp_path / "in.mp4", tmp_path / "a1" / "thumbnail.jpg")

        assert not outcome.succeeded
        assert "not a valid image" in outcome.error
