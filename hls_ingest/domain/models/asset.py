"""Asset and published asset record domain models."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hls_ingest.domain.value_objects.asset_id import ASSET_ID_PATTERN


def _validate_asset_id(value: str) -> str:
    if not ASSET_ID_PATTERN.fullmatch(value):
        raise ValueError(f"Invalid asset id format: '{value}'")
    return value


class Asset(BaseModel):
    """An ingested source video awaiting rendition.

    The orchestrator owns ``source_path`` while processing; on total failure
    the file is deleted, on success it is left in place.
    """

    model_config = ConfigDict(frozen=True)

    asset_id: str = Field(description="Unique, path-safe asset identifier")
    source_path: Path = Field(description="Fully written source file on local disk")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the asset was ingested",
    )

    @field_validator("asset_id")
    @classmethod
    def validate_asset_id(cls, v: str) -> str:
        """Asset ids name directories, so they must be path-safe."""
        return _validate_asset_id(v)


class AssetRecord(BaseModel):
    """Published metadata for an asset whose rendition batch succeeded.

    Created once, after the quorum decision, and never updated.
    """

    model_config = ConfigDict(frozen=True)

    asset_id: str = Field(description="Identifier of the processed asset")
    rendition_urls: dict[str, str] = Field(
        description="Profile name -> playlist locator, successful renditions only",
    )
    thumbnail_url: str | None = Field(
        default=None,
        description="Preview image locator, None if capture failed",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the record was created",
    )

    @field_validator("asset_id")
    @classmethod
    def validate_asset_id(cls, v: str) -> str:
        """Asset ids name directories, so they must be path-safe."""
        return _validate_asset_id(v)

    @property
    def has_thumbnail(self) -> bool:
        """Whether a preview image was produced."""
        return self.thumbnail_url is not None

    def to_document(self) -> dict[str, Any]:
        """Serialize for the document store, keyed by asset id."""
        doc = self.model_dump()
        doc["id"] = doc["asset_id"]
        return doc

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """Rebuild a record from a stored document."""
        data = {k: v for k, v in document.items() if k != "id"}
        data.setdefault("asset_id", document.get("id"))
        created_at = data.get("created_at")
        if isinstance(created_at, datetime) and created_at.tzinfo is None:
            # Mongo drops tzinfo; everything we write is UTC.
            data["created_at"] = created_at.replace(tzinfo=UTC)
        return cls(**data)
