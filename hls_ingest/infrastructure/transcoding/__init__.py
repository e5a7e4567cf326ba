"""External transcoding engine invocation."""

from hls_ingest.infrastructure.transcoding.base import ProcessInvokerBase, ProcessResult
from hls_ingest.infrastructure.transcoding.subprocess_invoker import SubprocessInvoker

__all__ = [
    # Base classes
    "ProcessInvokerBase",
    "ProcessResult",
    # Implementations
    "SubprocessInvoker",
]
