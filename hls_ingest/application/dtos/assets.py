"""DTOs for asset upload and lookup."""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from hls_ingest.domain.models.asset import AssetRecord


class AssetResponse(BaseModel):
    """A published asset and where its renditions are served."""

    asset_id: str = Field(description="Asset identifier")
    rendition_urls: dict[str, str] = Field(
        description="Profile name -> HLS playlist URL for each produced rendition",
    )
    thumbnail_url: str | None = Field(
        default=None,
        description="Preview image URL, absent if capture failed",
    )
    created_at: datetime = Field(description="When the record was published")

    @classmethod
    def from_record(cls, record: AssetRecord) -> Self:
        return cls(
            asset_id=record.asset_id,
            rendition_urls=dict(record.rendition_urls),
            thumbnail_url=record.thumbnail_url,
            created_at=record.created_at,
        )


class PaginationInfo(BaseModel):
    """Pagination metadata."""

    page: int = Field(ge=1, description="Current page number")
    page_size: int = Field(ge=1, le=100, description="Items per page")
    total_items: int = Field(ge=0, description="Total number of items")
    total_pages: int = Field(ge=0, description="Total number of pages")


class AssetListResponse(BaseModel):
    """Paginated listing of published assets."""

    assets: list[AssetResponse] = Field(description="Assets on this page")
    pagination: PaginationInfo = Field(description="Pagination metadata")


class VideoResponse(BaseModel):
    """Asset in the camelCase shape served under the ``/videos`` paths."""

    model_config = ConfigDict(populate_by_name=True)

    video_id: str = Field(alias="videoId")
    video_urls: dict[str, str] = Field(alias="videoUrls")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_record(cls, record: AssetRecord) -> Self:
        return cls(
            video_id=record.asset_id,
            video_urls=dict(record.rendition_urls),
            thumbnail_url=record.thumbnail_url,
            created_at=record.created_at,
        )
