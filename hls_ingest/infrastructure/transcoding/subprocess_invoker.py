"""Subprocess implementation of the engine invoker."""

import asyncio
import shutil
from collections.abc import Sequence

from hls_ingest.commons.telemetry import get_logger
from hls_ingest.infrastructure.transcoding.base import ProcessInvokerBase, ProcessResult

STDERR_TAIL_CHARS = 2000


class SubprocessInvoker(ProcessInvokerBase):
    """Runs engine processes as asyncio child processes.

    No thread is held per call, so any number of concurrent calls run as
    parallel OS processes. A call that exceeds its timeout, or is cancelled,
    kills and reaps its child before returning.
    """

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    async def invoke(
        self,
        args: Sequence[str],
        timeout_seconds: float | None = None,
    ) -> ProcessResult:
        """Run the process and report how it ended."""
        cmd = [str(a) for a in args]
        self._logger.debug(
            "Invoking engine",
            extra={"command": " ".join(cmd), "timeout_seconds": timeout_seconds},
        )

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            self._logger.error(
                "Engine process could not be started",
                extra={"command": cmd[0], "error": str(e)},
            )
            return ProcessResult(returncode=None, launch_error=str(e))

        try:
            _, stderr_bytes = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout_seconds,
            )
        except TimeoutError:
            await self._kill(process)
            self._logger.warning(
                "Engine process timed out and was killed",
                extra={"command": cmd[0], "timeout_seconds": timeout_seconds},
            )
            return ProcessResult(returncode=None, timed_out=True)
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        stderr = stderr_bytes.decode("utf-8", errors="ignore") if stderr_bytes else ""
        return ProcessResult(
            returncode=process.returncode,
            stderr_tail=stderr.strip()[-STDERR_TAIL_CHARS:],
        )

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        """Kill the child if still running and wait for it to exit."""
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()

    def is_available(self, executable: str) -> bool:
        """Check that the executable resolves on PATH (or as a path)."""
        return shutil.which(executable) is not None
