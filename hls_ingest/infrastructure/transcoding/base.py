"""Abstract capability for running the external transcoding engine."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessResult:
    """What the orchestrator may observe about a finished engine process."""

    returncode: int | None
    stderr_tail: str = ""
    timed_out: bool = False
    launch_error: str | None = None

    @property
    def ok(self) -> bool:
        """True only for a normal exit with status 0."""
        return self.returncode == 0 and not self.timed_out and self.launch_error is None

    def describe_failure(self) -> str:
        """Short, human-readable failure cause."""
        if self.launch_error is not None:
            return f"could not start engine: {self.launch_error}"
        if self.timed_out:
            return "engine timed out"
        cause = f"engine exited with status {self.returncode}"
        if self.stderr_tail:
            cause += f": {self.stderr_tail}"
        return cause


class ProcessInvokerBase(ABC):
    """Runs one engine invocation to completion.

    Implementations should handle:
    - Local subprocesses
    - Test doubles that simulate success, failure and slowness
    """

    @abstractmethod
    async def invoke(
        self,
        args: Sequence[str],
        timeout_seconds: float | None = None,
    ) -> ProcessResult:
        """Run ``args`` and wait for it to finish.

        Must not raise for engine-level failures; those are reported through
        the returned ProcessResult.

        Args:
            args: Full argv, executable first.
            timeout_seconds: Kill the process after this long, None to wait forever.

        Returns:
            Exit information for the process.
        """

    @abstractmethod
    def is_available(self, executable: str) -> bool:
        """Whether ``executable`` can be launched."""
