"""API layer - REST endpoints and static HLS output."""

from hls_ingest.api.main import app, create_app

__all__ = [
    "app",
    "create_app",
]
