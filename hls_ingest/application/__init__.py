"""Application layer - use cases and orchestration.

This layer contains:
- Services: rendition jobs, the orchestrator, publishing and lookup
- DTOs: Data transfer objects for API boundaries
"""

from hls_ingest.application.dtos import (
    AssetListResponse,
    AssetResponse,
    PaginationInfo,
)
from hls_ingest.application.services import (
    AssetCatalogService,
    AssetIngestionService,
    AssetRecordPublisher,
    OutputLayout,
    RenditionJobRunner,
    RenditionOrchestrator,
    ThumbnailJobRunner,
    ThumbnailPolicy,
    decide_quorum,
)

__all__ = [
    # DTOs
    "AssetResponse",
    "AssetListResponse",
    "PaginationInfo",
    # Services
    "AssetCatalogService",
    "AssetIngestionService",
    "AssetRecordPublisher",
    "OutputLayout",
    "RenditionJobRunner",
    "RenditionOrchestrator",
    "ThumbnailJobRunner",
    "ThumbnailPolicy",
    "decide_quorum",
]
