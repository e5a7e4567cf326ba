"""API middleware components."""

from hls_ingest.api.middleware.error_handler import error_handler_middleware
from hls_ingest.api.middleware.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
    "error_handler_middleware",
]
