"""Upload and lookup endpoints at the ``/upload`` and ``/videos`` paths.

Same services as the asset endpoints, with the multipart field named
``video``, a 200 on upload and camelCase payloads.
"""

from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from hls_ingest.api.dependencies import CatalogServiceDep, IngestionServiceDep
from hls_ingest.application.dtos.assets import VideoResponse
from hls_ingest.domain.exceptions import EmptyUploadException

router = APIRouter()


@router.post(
    "/upload",
    response_model=VideoResponse,
    summary="Upload a video (video field)",
)
async def upload_video(
    service: IngestionServiceDep,
    video: Annotated[UploadFile | None, File(description="Source video file")] = None,
) -> VideoResponse:
    """Upload a video and return its published renditions."""
    if video is None:
        raise EmptyUploadException()

    try:
        record = await service.ingest(video)
    finally:
        await video.close()

    return VideoResponse.from_record(record)


@router.get(
    "/videos",
    response_model=list[VideoResponse],
    summary="List all videos",
)
async def list_videos(service: CatalogServiceDep) -> list[VideoResponse]:
    """List every published asset, newest first."""
    total = await service.count()
    if total == 0:
        return []
    records = await service.list_assets(skip=0, limit=total)
    return [VideoResponse.from_record(r) for r in records]


@router.get(
    "/videos/{video_id}",
    response_model=VideoResponse,
    summary="Get video",
)
async def get_video(video_id: str, service: CatalogServiceDep) -> VideoResponse:
    """Get a single published asset."""
    record = await service.get(video_id)
    return VideoResponse.from_record(record)
