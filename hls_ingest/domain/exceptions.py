"""Domain exceptions for the rendition pipeline."""

from __future__ import annotations

from collections.abc import Iterable


class DomainException(Exception):
    """Base exception for domain errors."""


class InvalidAssetIdException(DomainException):
    """Raised when an asset identifier is not filesystem-path-safe."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid asset id: '{value}'")


class AssetNotFoundException(DomainException):
    """Raised when no published record exists for an asset."""

    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"Asset not found: {asset_id}")


class UnknownProfileException(DomainException):
    """Raised when a profile name is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown rendition profile: {name}")


class UnsupportedMediaTypeException(DomainException):
    """Raised when an upload has a content type we do not transcode."""

    def __init__(self, content_type: str | None, allowed: Iterable[str]) -> None:
        self.content_type = content_type
        self.allowed = list(allowed)
        super().__init__(
            f"Unsupported media type '{content_type}'. "
            f"Allowed: {', '.join(self.allowed)}"
        )


class UploadTooLargeException(DomainException):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, limit_bytes: int) -> None:
        self.limit_bytes = limit_bytes
        super().__init__(f"Upload exceeds limit of {limit_bytes} bytes")


class EmptyUploadException(DomainException):
    """Raised when an upload carries no file data."""

    def __init__(self) -> None:
        super().__init__("No file uploaded")


class JobFailedException(DomainException):
    """A single encode or capture job failed.

    Carried as the cause on a failed outcome; never raised to callers of
    the orchestrator.
    """

    def __init__(self, profile_name: str, cause: str) -> None:
        self.profile_name = profile_name
        self.cause = cause
        super().__init__(f"Job {profile_name} failed: {cause}")


class OrchestrationException(DomainException):
    """Terminal failure of a rendition batch. Artifacts have been reclaimed."""

    def __init__(self, asset_id: str, reason: str) -> None:
        self.asset_id = asset_id
        self.reason = reason
        super().__init__(f"Rendition batch failed for {asset_id}: {reason}")


class AllRenditionsFailedException(OrchestrationException):
    """Raised when no rendition of the batch succeeded."""

    def __init__(self, asset_id: str, failed_profiles: Iterable[str]) -> None:
        self.failed_profiles = sorted(failed_profiles)
        super().__init__(
            asset_id,
            f"all renditions failed ({', '.join(self.failed_profiles) or 'none requested'})",
        )


class ThumbnailRequiredException(OrchestrationException):
    """Raised when the thumbnail failed and the policy requires one."""

    def __init__(self, asset_id: str, cause: str | None) -> None:
        self.cause = cause
        super().__init__(asset_id, f"required thumbnail failed: {cause}")


class CleanupFailedException(DomainException):
    """Deleting a failed batch's artifacts errored. Logged, never raised."""

    def __init__(self, asset_id: str, path: str, cause: str) -> None:
        self.asset_id = asset_id
        self.path = path
        self.cause = cause
        super().__init__(f"Cleanup of {path} for {asset_id} failed: {cause}")


class PersistException(DomainException):
    """Raised when writing a record fails after a successful batch.

    The produced files stay on disk, so only the publish step needs retrying.
    """

    def __init__(self, asset_id: str, reason: str) -> None:
        self.asset_id = asset_id
        self.reason = reason
        super().__init__(f"Persisting record for {asset_id} failed: {reason}")
