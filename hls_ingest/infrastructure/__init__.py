"""Infrastructure layer - external service implementations."""

from hls_ingest.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from hls_ingest.infrastructure.transcoding import (
    ProcessInvokerBase,
    ProcessResult,
    SubprocessInvoker,
)

__all__ = [
    # Factory
    "InfrastructureFactory",
    "get_factory",
    "reset_factory",
    # Transcoding
    "ProcessInvokerBase",
    "ProcessResult",
    "SubprocessInvoker",
]
