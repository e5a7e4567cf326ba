"""API route handlers."""

from hls_ingest.api.openapi.routes import assets, health, videos

__all__ = [
    "assets",
    "health",
    "videos",
]
