"""Persists asset records once a rendition batch has succeeded."""

from hls_ingest.commons.infrastructure.documentdb.base import (
    DocumentDBBase,
    DuplicateDocumentError,
)
from hls_ingest.commons.telemetry import get_logger, log_exceptions
from hls_ingest.domain.exceptions import PersistException
from hls_ingest.domain.models.asset import AssetRecord

logger = get_logger(__name__)


class AssetRecordPublisher:
    """Single append-only write of an AssetRecord, keyed by asset id.

    Callers invoke ``publish`` at most once per asset; a second call for the
    same id is rejected by the store rather than overwriting.
    """

    def __init__(self, document_db: DocumentDBBase, collection: str) -> None:
        self._document_db = document_db
        self._collection = collection

    @log_exceptions(logger=logger, message="Publishing asset record failed")
    async def publish(self, record: AssetRecord) -> None:
        """Write ``record`` to the metadata store.

        Raises:
            PersistException: If the store rejects or fails the write.
        """
        try:
            await self._document_db.insert(self._collection, record.to_document())
        except DuplicateDocumentError as e:
            raise PersistException(record.asset_id, "record already published") from e
        except Exception as e:
            raise PersistException(record.asset_id, str(e)) from e

        logger.info(
            "Asset record published",
            extra={
                "asset_id": record.asset_id,
                "renditions": sorted(record.rendition_urls),
                "has_thumbnail": record.has_thumbnail,
            },
        )
