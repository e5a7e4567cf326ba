"""FastAPI dependency injection for services and settings."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends

from hls_ingest.application.services import (
    AssetCatalogService,
    AssetIngestionService,
    AssetRecordPublisher,
    OutputLayout,
    RenditionJobRunner,
    RenditionOrchestrator,
    ThumbnailJobRunner,
    ThumbnailPolicy,
)
from hls_ingest.commons.settings.loader import get_settings as _load_settings
from hls_ingest.commons.settings.models import Settings
from hls_ingest.commons.telemetry import get_logger
from hls_ingest.domain.models.profile import ProfileCatalog
from hls_ingest.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)

logger = get_logger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return _load_settings()


def get_infrastructure_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> InfrastructureFactory:
    """Get infrastructure factory with all providers."""
    return get_factory(settings)


def build_layout(settings: Settings) -> OutputLayout:
    """Output layout derived from storage and thumbnail settings."""
    return OutputLayout(
        output_root=Path(settings.storage.output_dir),
        public_base_url=settings.storage.public_base_url,
        mount_path=settings.storage.static_mount_path,
        thumbnail_name=settings.thumbnail.filename,
    )


def build_orchestrator(
    settings: Settings,
    factory: InfrastructureFactory,
) -> RenditionOrchestrator:
    """Wire runners, publisher and layout into an orchestrator.

    Args:
        settings: Application settings.
        factory: Infrastructure factory.

    Returns:
        Orchestrator ready to process assets.
    """
    transcoding = settings.transcoding
    layout = build_layout(settings)
    invoker = factory.get_process_invoker()

    return RenditionOrchestrator(
        rendition_runner=RenditionJobRunner(
            invoker=invoker,
            locator=layout.locator_for,
            ffmpeg_path=transcoding.ffmpeg_path,
            preset=transcoding.preset,
            segment_seconds=transcoding.segment_seconds,
            timeout_seconds=transcoding.job_timeout_seconds,
        ),
        thumbnail_runner=ThumbnailJobRunner(
            invoker=invoker,
            locator=layout.locator_for,
            ffmpeg_path=transcoding.ffmpeg_path,
            seek_seconds=settings.thumbnail.seek_seconds,
            size=(settings.thumbnail.width, settings.thumbnail.height),
            timeout_seconds=transcoding.job_timeout_seconds,
        ),
        publisher=AssetRecordPublisher(
            document_db=factory.get_document_db(),
            collection=settings.document_db.collections.assets,
        ),
        layout=layout,
        thumbnail_policy=ThumbnailPolicy(transcoding.thumbnail_policy),
    )


def get_ingestion_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AssetIngestionService:
    """Get the upload ingestion service."""
    return AssetIngestionService(
        orchestrator=build_orchestrator(settings, factory),
        profiles=ProfileCatalog().select(settings.transcoding.profiles),
        uploads_dir=Path(settings.storage.uploads_dir),
        upload_settings=settings.upload,
    )


def get_catalog_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AssetCatalogService:
    """Get the read service for published assets."""
    return AssetCatalogService(
        document_db=factory.get_document_db(),
        collection=settings.document_db.collections.assets,
    )


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
FactoryDep = Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)]
IngestionServiceDep = Annotated[AssetIngestionService, Depends(get_ingestion_service)]
CatalogServiceDep = Annotated[AssetCatalogService, Depends(get_catalog_service)]


def ensure_storage_dirs(settings: Settings) -> None:
    """Create the uploads and output roots if missing."""
    for directory in (settings.storage.uploads_dir, settings.storage.output_dir):
        Path(directory).mkdir(parents=True, exist_ok=True)


async def init_services(settings: Settings) -> None:
    """Initialize infrastructure on startup.

    Args:
        settings: Application settings.
    """
    ensure_storage_dirs(settings)
    factory = get_factory(settings)

    # Fail fast on an unknown profile name in configuration.
    ProfileCatalog().select(settings.transcoding.profiles)

    document_db = factory.get_document_db()
    await document_db.create_index(
        settings.document_db.collections.assets,
        [("created_at", -1)],
        name="created_at_desc",
    )

    ffmpeg = settings.transcoding.ffmpeg_path
    if not factory.get_process_invoker().is_available(ffmpeg):
        logger.error(
            "Transcoder executable not found, every upload will fail",
            extra={"ffmpeg_path": ffmpeg},
        )


async def shutdown_services() -> None:
    """Shutdown all infrastructure services."""
    try:
        factory = get_factory()
        await factory.close_all()
    except ValueError:
        pass  # Factory not initialized
    finally:
        reset_factory()
        get_settings.cache_clear()
