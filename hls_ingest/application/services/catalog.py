"""Read side of the published asset records."""

from hls_ingest.commons.infrastructure.documentdb.base import DocumentDBBase
from hls_ingest.domain.exceptions import AssetNotFoundException
from hls_ingest.domain.models.asset import AssetRecord
from hls_ingest.domain.value_objects.asset_id import AssetId


class AssetCatalogService:
    """Lookup-by-id and list-all over published records."""

    def __init__(self, document_db: DocumentDBBase, collection: str) -> None:
        self._document_db = document_db
        self._collection = collection

    async def get(self, asset_id: str) -> AssetRecord:
        """Fetch one record.

        Raises:
            InvalidAssetIdException: If ``asset_id`` is malformed.
            AssetNotFoundException: If nothing was published for it.
        """
        key = AssetId.parse(asset_id).value
        document = await self._document_db.find_by_id(self._collection, key)
        if document is None:
            raise AssetNotFoundException(key)
        return AssetRecord.from_document(document)

    async def list_assets(self, skip: int = 0, limit: int = 20) -> list[AssetRecord]:
        """Newest records first."""
        documents = await self._document_db.find(
            self._collection,
            {},
            skip=skip,
            limit=limit,
            sort=[("created_at", -1)],
        )
        return [AssetRecord.from_document(doc) for doc in documents]

    async def count(self) -> int:
        return await self._document_db.count(self._collection)
