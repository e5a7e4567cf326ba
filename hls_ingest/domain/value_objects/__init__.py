"""Domain value objects."""

from hls_ingest.domain.value_objects.asset_id import ASSET_ID_PATTERN, AssetId

__all__ = [
    "ASSET_ID_PATTERN",
    "AssetId",
]
