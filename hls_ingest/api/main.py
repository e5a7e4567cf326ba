"""FastAPI application factory and lifespan management."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from hls_ingest.api.dependencies import (
    get_settings,
    init_services,
    shutdown_services,
)
from hls_ingest.api.middleware.error_handler import error_handler_middleware
from hls_ingest.api.middleware.logging import LoggingMiddleware
from hls_ingest.api.openapi.routes import assets, health, videos
from hls_ingest.commons.settings.models import Settings
from hls_ingest.commons.telemetry import build_formatter, configure_logging


def _setup_logging() -> None:
    """Configure the package logger before uvicorn starts."""
    settings = get_settings()
    log_level = settings.telemetry.log_level or settings.app.log_level

    configure_logging(
        level=log_level,
        format_type=settings.telemetry.log_format,
        logger_name="hls_ingest",
    )
    logging.getLogger().setLevel(getattr(logging, log_level.upper()))


def _configure_uvicorn_logging() -> None:
    """Route uvicorn's loggers through our formatter.

    Called during lifespan when uvicorn handlers are available.
    """
    settings = get_settings()
    level = getattr(logging, (settings.telemetry.log_level or settings.app.log_level).upper())
    formatter = build_formatter(settings.telemetry.log_format)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setFormatter(formatter)
            handler.setLevel(level)
        if not logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            handler.setLevel(level)
            logger.addHandler(handler)
            logger.propagate = False


_setup_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize infrastructure on startup and release it on shutdown."""
    _configure_uvicorn_logging()

    await init_services(get_settings())

    yield

    await shutdown_services()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Video upload service producing HLS renditions and thumbnails",
        docs_url="/docs" if settings.server.docs_enabled else None,
        redoc_url="/redoc" if settings.server.docs_enabled else None,
        openapi_url="/openapi.json" if settings.server.docs_enabled else None,
        lifespan=lifespan,
    )

    _configure_middleware(app, settings)
    _register_routes(app, settings)
    _mount_static(app, settings)

    return app


def _configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure application middleware."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    app.middleware("http")(error_handler_middleware)


def _register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes."""
    app.include_router(health.router, tags=["Health"])
    app.include_router(assets.router, prefix=settings.server.api_prefix, tags=["Assets"])
    app.include_router(videos.router, prefix=settings.server.api_prefix, tags=["Videos"])


def _mount_static(app: FastAPI, settings: Settings) -> None:
    """Serve produced playlists, segments and thumbnails from the output root."""
    app.mount(
        settings.storage.static_mount_path,
        StaticFiles(directory=Path(settings.storage.output_dir), check_dir=False),
        name="hls-output",
    )


app = create_app()
