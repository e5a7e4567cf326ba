"""Unit tests for the subprocess engine invoker.

These run real child processes through the current interpreter.
"""

import asyncio
import os
import sys
import time
from unittest.mock import AsyncMock, patch

from PIL import Image

from hls_ingest.application.services import (
    AssetRecordPublisher,
    OutputLayout,
    RenditionJobRunner,
    RenditionOrchestrator,
    ThumbnailJobRunner,
)
from hls_ingest.domain.models import DEFAULT_PROFILES, Asset, ProfileCatalog
from hls_ingest.infrastructure.transcoding import ProcessResult, SubprocessInvoker
from hls_ingest.infrastructure.transcoding.subprocess_invoker import STDERR_TAIL_CHARS

PY = sys.executable


def py(code, *extra):
    return [PY, "-c", code, *extra]


class TestProcessResult:
    """Tests for ProcessResult."""

    def test_ok_only_for_clean_zero_exit(self):
        assert ProcessResult(returncode=0).ok
        assert not ProcessResult(returncode=1).ok
        assert not ProcessResult(returncode=None, timed_out=True).ok
        assert not ProcessResult(returncode=None, launch_error="no such file").ok

    def test_describe_failure(self):
        assert "timed out" in ProcessResult(returncode=None, timed_out=True).describe_failure()
        assert "could not start" in ProcessResult(
            returncode=None, launch_error="missing"
        ).describe_failure()
        described = ProcessResult(returncode=1, stderr_tail="Invalid data").describe_failure()
        assert described == "engine exited with status 1: Invalid data"


class TestSubprocessInvoker:
    """Tests for SubprocessInvoker."""

    async def test_successful_run(self):
        result = await SubprocessInvoker().invoke(py("pass"), timeout_seconds=30)

        assert result.ok
        assert result.returncode == 0

    async def test_non_zero_exit_keeps_stderr_tail(self):
        code = (
            "import sys; "
            f"sys.stderr.write('x' * {STDERR_TAIL_CHARS} + 'tail message'); "
            "sys.exit(1)"
        )
        result = await SubprocessInvoker().invoke(py(code))

        assert result.returncode == 1
        assert not result.ok
        assert result.stderr_tail.endswith("tail message")
        assert len(result.stderr_tail) == STDERR_TAIL_CHARS

    async def test_timeout_kills_child(self):
        start = time.monotonic()
        result = await SubprocessInvoker().invoke(
            py("import time; time.sleep(30)"), timeout_seconds=0.3
        )

        assert result.timed_out
        assert not result.ok
        assert time.monotonic() - start < 10

    async def test_launch_failure(self, tmp_path):
        result = await SubprocessInvoker().invoke([str(tmp_path / "no-such-engine")])

        assert result.launch_error is not None
        assert not result.ok

    async def test_arguments_are_stringified(self, tmp_path):
        target = tmp_path / "out.txt"
        code = "import pathlib, sys; pathlib.Path(sys.argv[1]).write_text('ok')"

        result = await SubprocessInvoker().invoke(py(code, target))

        assert result.ok
        assert target.read_text() == "ok"

    async def test_cancellation_kills_and_reaps_child(self, tmp_path):
        pid_file = tmp_path / "pid"
        code = (
            "import os, pathlib, sys, time; "
            "pathlib.Path(sys.argv[1]).write_text(str(os.getpid())); "
            "time.sleep(30)"
        )
        task = asyncio.create_task(SubprocessInvoker().invoke(py(code, pid_file)))

        for _ in range(200):
            if pid_file.exists() and pid_file.read_text():
                break
            await asyncio.sleep(0.05)
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        pid = int(pid_file.read_text())
        try:
            os.kill(pid, 0)
            alive = True
        except ProcessLookupError:
            alive = False
        assert not alive

    async def test_concurrent_calls_run_in_parallel(self):
        invoker = SubprocessInvoker()
        jobs = 8

        start = time.monotonic()
        results = await asyncio.gather(
            *(invoker.invoke(py("import time; time.sleep(1)")) for _ in range(jobs))
        )
        elapsed = time.monotonic() - start

        assert all(r.ok for r in results)
        assert elapsed < 1.8

    def test_is_available(self):
        invoker = SubprocessInvoker()
        with patch(
            "hls_ingest.infrastructure.transcoding.subprocess_invoker.shutil.which",
            side_effect=lambda name: "/usr/bin/ffmpeg" if name == "ffmpeg" else None,
        ):
            assert invoker.is_available("ffmpeg")
            assert not invoker.is_available("missing-binary")


class TestSubprocessInvokerWithOrchestrator:
    """A whole asset batch through real child processes."""

    async def test_batch_jobs_overlap(self, tmp_path):
        # Stand-in engine: sleeps one second, then writes its last argument.
        template = tmp_path / "template.jpg"
        Image.new("RGB", (320, 180), "blue").save(template, "JPEG")
        engine = tmp_path / "slow-engine"
        engine.write_text(
            f"#!{PY}\n"
            "import shutil, sys, time\n"
            "time.sleep(1)\n"
            "out = sys.argv[-1]\n"
            "if out.endswith('.jpg'):\n"
            f"    shutil.copyfile({str(template)!r}, out)\n"
            "else:\n"
            "    open(out, 'w').write('#EXTM3U\\n')\n"
        )
        engine.chmod(0o755)

        invoker = SubprocessInvoker()
        layout = OutputLayout(tmp_path / "out", "http://localhost:2000")
        document_db = AsyncMock()
        orchestrator = RenditionOrchestrator(
            rendition_runner=RenditionJobRunner(
                invoker, locator=layout.locator_for, ffmpeg_path=str(engine)
            ),
            thumbnail_runner=ThumbnailJobRunner(
                invoker, locator=layout.locator_for, ffmpeg_path=str(engine)
            ),
            publisher=AssetRecordPublisher(document_db, "assets"),
            layout=layout,
        )
        source = tmp_path / "asset-1.mp4"
        source.write_bytes(b"fake video")

        start = time.monotonic()
        record = await orchestrator.process(
            Asset(asset_id="asset-1", source_path=source), ProfileCatalog().select()
        )
        elapsed = time.monotonic() - start

        assert set(record.rendition_urls) == {p.name for p in DEFAULT_PROFILES}
        assert record.thumbnail_url is not None
        assert elapsed < 1.8
