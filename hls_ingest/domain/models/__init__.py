"""Domain models."""

from hls_ingest.domain.models.asset import Asset, AssetRecord
from hls_ingest.domain.models.outcome import (
    JobStatus,
    RenditionJobOutcome,
    ThumbnailOutcome,
)
from hls_ingest.domain.models.profile import (
    DEFAULT_PROFILES,
    ProfileCatalog,
    RenditionProfile,
)

__all__ = [
    # Assets
    "Asset",
    "AssetRecord",
    # Profiles
    "RenditionProfile",
    "ProfileCatalog",
    "DEFAULT_PROFILES",
    # Outcomes
    "JobStatus",
    "RenditionJobOutcome",
    "ThumbnailOutcome",
]
