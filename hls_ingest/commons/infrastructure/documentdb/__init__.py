"""Document database abstractions and implementations."""

from hls_ingest.commons.infrastructure.documentdb.base import (
    DocumentDBBase,
    DuplicateDocumentError,
    HealthStatus,
)
from hls_ingest.commons.infrastructure.documentdb.mongodb_provider import (
    MongoDBDocumentDB,
)

__all__ = [
    # Base classes
    "DocumentDBBase",
    "DuplicateDocumentError",
    "HealthStatus",
    # Implementations
    "MongoDBDocumentDB",
]
