"""Domain layer - rendition models, value objects and exceptions."""

from hls_ingest.domain.exceptions import (
    AllRenditionsFailedException,
    AssetNotFoundException,
    CleanupFailedException,
    DomainException,
    EmptyUploadException,
    InvalidAssetIdException,
    JobFailedException,
    OrchestrationException,
    PersistException,
    ThumbnailRequiredException,
    UnknownProfileException,
    UnsupportedMediaTypeException,
    UploadTooLargeException,
)
from hls_ingest.domain.models import (
    DEFAULT_PROFILES,
    Asset,
    AssetRecord,
    JobStatus,
    ProfileCatalog,
    RenditionJobOutcome,
    RenditionProfile,
    ThumbnailOutcome,
)
from hls_ingest.domain.value_objects import AssetId

__all__ = [
    # Exceptions
    "DomainException",
    "InvalidAssetIdException",
    "AssetNotFoundException",
    "UnknownProfileException",
    "UnsupportedMediaTypeException",
    "UploadTooLargeException",
    "EmptyUploadException",
    "JobFailedException",
    "OrchestrationException",
    "AllRenditionsFailedException",
    "ThumbnailRequiredException",
    "CleanupFailedException",
    "PersistException",
    # Models
    "Asset",
    "AssetRecord",
    "RenditionProfile",
    "ProfileCatalog",
    "DEFAULT_PROFILES",
    "JobStatus",
    "RenditionJobOutcome",
    "ThumbnailOutcome",
    # Value Objects
    "AssetId",
]
