"""Infrastructure factory for creating service instances from configuration."""

from typing import Any, cast

from hls_ingest.commons.infrastructure.documentdb import (
    DocumentDBBase,
    MongoDBDocumentDB,
)
from hls_ingest.commons.settings.models import Settings
from hls_ingest.commons.telemetry import get_logger
from hls_ingest.infrastructure.transcoding import ProcessInvokerBase, SubprocessInvoker

logger = get_logger(__name__)


class InfrastructureFactory:
    """Lazily builds and caches concrete infrastructure providers."""

    def __init__(self, settings: Settings) -> None:
        """Initialize factory with settings.

        Args:
            settings: Application settings.
        """
        self._settings = settings
        self._instances: dict[str, Any] = {}

    def get_document_db(self) -> DocumentDBBase:
        """Get the document database holding asset records."""
        if "document_db" not in self._instances:
            doc_settings = self._settings.document_db
            if doc_settings.username and doc_settings.password:
                connection_string = (
                    f"mongodb://{doc_settings.username}:{doc_settings.password}"
                    f"@{doc_settings.host}:{doc_settings.port}"
                    f"/?authSource={doc_settings.auth_source}"
                )
            else:
                connection_string = f"mongodb://{doc_settings.host}:{doc_settings.port}"
            self._instances["document_db"] = MongoDBDocumentDB(
                connection_string=connection_string,
                database_name=doc_settings.database,
            )
        return cast("DocumentDBBase", self._instances["document_db"])

    def get_process_invoker(self) -> ProcessInvokerBase:
        """Get the invoker used to run the transcoding engine."""
        if "process_invoker" not in self._instances:
            self._instances["process_invoker"] = SubprocessInvoker()
        return cast("ProcessInvokerBase", self._instances["process_invoker"])

    async def close_all(self) -> None:
        """Close every provider that holds connections."""
        for name, instance in self._instances.items():
            close = getattr(instance, "close", None)
            if close is None:
                continue
            try:
                await close()
            except Exception:
                logger.warning(
                    "Failed to close provider", extra={"provider": name}, exc_info=True
                )

        self._instances.clear()


class _FactoryHolder:
    """Holder for the factory singleton to avoid global statements."""

    instance: InfrastructureFactory | None = None


def get_factory(settings: Settings | None = None) -> InfrastructureFactory:
    """Get or create the infrastructure factory singleton.

    Args:
        settings: Settings to use. Required on first call.

    Raises:
        ValueError: If settings not provided on first call.
    """
    if _FactoryHolder.instance is None:
        if settings is None:
            raise ValueError("Settings required to initialize factory")
        _FactoryHolder.instance = InfrastructureFactory(settings)

    return _FactoryHolder.instance


def reset_factory() -> None:
    """Reset the factory singleton (for testing)."""
    _FactoryHolder.instance = None
