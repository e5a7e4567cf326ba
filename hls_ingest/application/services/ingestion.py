"""Upload ingestion: validates and stores a source video, then renders it."""

import asyncio
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from hls_ingest.application.services.orchestrator import RenditionOrchestrator
from hls_ingest.commons.settings.models import UploadSettings
from hls_ingest.commons.telemetry import LogContext, get_logger
from hls_ingest.domain.exceptions import (
    EmptyUploadException,
    UnsupportedMediaTypeException,
    UploadTooLargeException,
)
from hls_ingest.domain.models.asset import Asset, AssetRecord
from hls_ingest.domain.models.profile import RenditionProfile
from hls_ingest.domain.value_objects.asset_id import AssetId

_SAFE_SUFFIX = re.compile(r"\.[A-Za-z0-9]{1,8}")


class UploadSource(Protocol):
    """The subset of an uploaded file we read from."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


class AssetIngestionService:
    """Entry point for a freshly uploaded video.

    Pipeline:
    1. Check content type against the allow-list
    2. Assign a new asset id and stream the upload to ``<uploads>/<id><ext>``
    3. Hand the stored file to the orchestrator
    """

    def __init__(
        self,
        orchestrator: RenditionOrchestrator,
        profiles: Sequence[RenditionProfile],
        uploads_dir: Path,
        upload_settings: UploadSettings,
    ) -> None:
        """Initialize ingestion service with dependencies.

        Args:
            orchestrator: Runs the rendition batch for stored uploads.
            profiles: Profiles every upload is encoded to.
            uploads_dir: Where source files are written.
            upload_settings: Size and content-type limits.
        """
        self._orchestrator = orchestrator
        self._profiles = list(profiles)
        self._uploads_dir = Path(uploads_dir)
        self._settings = upload_settings
        self._logger = get_logger(__name__)

    async def ingest(self, upload: UploadSource) -> AssetRecord:
        """Store ``upload`` and run its rendition batch.

        Raises:
            UnsupportedMediaTypeException: Content type not allowed.
            UploadTooLargeException: Upload exceeds the size limit.
            EmptyUploadException: Upload had no bytes.
            OrchestrationException: Every rendition failed.
            PersistException: Record write failed after success.
        """
        allowed = self._settings.allowed_content_types
        if upload.content_type not in allowed:
            raise UnsupportedMediaTypeException(upload.content_type, allowed)

        asset_id = AssetId.generate().value
        with LogContext(asset_id=asset_id):
            source_path = await self._store(upload, asset_id)
            self._logger.info(
                "Upload stored",
                extra={
                    "upload_filename": upload.filename,
                    "source": str(source_path),
                    "size_bytes": source_path.stat().st_size,
                },
            )

            asset = Asset(asset_id=asset_id, source_path=source_path)
            return await self._orchestrator.process(asset, self._profiles)

    async def _store(self, upload: UploadSource, asset_id: str) -> Path:
        suffix = Path(upload.filename or "").suffix
        if not _SAFE_SUFFIX.fullmatch(suffix):
            suffix = ""

        self._uploads_dir.mkdir(parents=True, exist_ok=True)
        destination = self._uploads_dir / f"{asset_id}{suffix.lower()}"
        limit = self._settings.max_size_mb * 1024 * 1024
        written = 0
        loop = asyncio.get_running_loop()

        # Disk writes run in the default executor, never on the loop thread.
        try:
            with destination.open("wb") as f:
                while chunk := await upload.read(self._settings.chunk_size_bytes):
                    written += len(chunk)
                    if written > limit:
                        raise UploadTooLargeException(limit)
                    await loop.run_in_executor(None, f.write, chunk)
            if written == 0:
                raise EmptyUploadException()
        except BaseException:
            destination.unlink(missing_ok=True)
            raise

        return destination
