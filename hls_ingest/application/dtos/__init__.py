"""Data transfer objects for the API boundary."""

from hls_ingest.application.dtos.assets import (
    AssetListResponse,
    AssetResponse,
    PaginationInfo,
    VideoResponse,
)

__all__ = [
    "AssetResponse",
    "AssetListResponse",
    "PaginationInfo",
    "VideoResponse",
]
