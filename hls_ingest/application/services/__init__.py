"""Application services for rendition orchestration and asset lookup."""

from hls_ingest.application.services.catalog import AssetCatalogService
from hls_ingest.application.services.ingestion import (
    AssetIngestionService,
    UploadSource,
)
from hls_ingest.application.services.layout import (
    PLAYLIST_NAME,
    SEGMENT_PATTERN,
    OutputLayout,
)
from hls_ingest.application.services.orchestrator import (
    DEFAULT_THUMBNAIL_POLICY,
    QuorumDecision,
    RenditionOrchestrator,
    ThumbnailPolicy,
    decide_quorum,
)
from hls_ingest.application.services.publisher import AssetRecordPublisher
from hls_ingest.application.services.rendition_runner import RenditionJobRunner
from hls_ingest.application.services.thumbnail_runner import ThumbnailJobRunner

__all__ = [
    "AssetCatalogService",
    "AssetIngestionService",
    "AssetRecordPublisher",
    "DEFAULT_THUMBNAIL_POLICY",
    "OutputLayout",
    "PLAYLIST_NAME",
    "QuorumDecision",
    "RenditionJobRunner",
    "RenditionOrchestrator",
    "SEGMENT_PATTERN",
    "ThumbnailJobRunner",
    "ThumbnailPolicy",
    "UploadSource",
    "decide_quorum",
]
