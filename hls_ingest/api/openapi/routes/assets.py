"""Asset upload and lookup endpoints."""

from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile, status

from hls_ingest.api.dependencies import CatalogServiceDep, IngestionServiceDep
from hls_ingest.application.dtos.assets import (
    AssetListResponse,
    AssetResponse,
    PaginationInfo,
)
from hls_ingest.domain.exceptions import EmptyUploadException

router = APIRouter()


@router.post(
    "/assets",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a video",
    description=(
        "Store an uploaded video and encode it to every configured HLS "
        "profile. Succeeds when at least one rendition was produced."
    ),
)
async def upload_asset(
    service: IngestionServiceDep,
    file: Annotated[UploadFile | None, File(description="Source video file")] = None,
) -> AssetResponse:
    """Upload a video and return its published renditions."""
    if file is None:
        raise EmptyUploadException()

    try:
        record = await service.ingest(file)
    finally:
        await file.close()

    return AssetResponse.from_record(record)


@router.get(
    "/assets",
    response_model=AssetListResponse,
    summary="List assets",
    description="List published assets, newest first.",
)
async def list_assets(
    service: CatalogServiceDep,
    page: Annotated[
        int,
        Query(ge=1, description="Page number"),
    ] = 1,
    page_size: Annotated[
        int,
        Query(ge=1, le=100, description="Items per page"),
    ] = 20,
) -> AssetListResponse:
    """List published assets with pagination."""
    skip = (page - 1) * page_size

    records = await service.list_assets(skip=skip, limit=page_size)
    total_items = await service.count()
    total_pages = (total_items + page_size - 1) // page_size

    return AssetListResponse(
        assets=[AssetResponse.from_record(r) for r in records],
        pagination=PaginationInfo(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
        ),
    )


@router.get(
    "/assets/{asset_id}",
    response_model=AssetResponse,
    summary="Get asset",
    description="Get the rendition and thumbnail URLs of a published asset.",
)
async def get_asset(
    asset_id: str,
    service: CatalogServiceDep,
) -> AssetResponse:
    """Get a single published asset."""
    record = await service.get(asset_id)
    return AssetResponse.from_record(record)
