"""Unit tests for infrastructure factory."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from hls_ingest.commons.settings.models import DocumentDBSettings, Settings
from hls_ingest.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from hls_ingest.infrastructure.transcoding import SubprocessInvoker


@pytest.fixture(autouse=True)
def reset_factory_before_each():
    """Reset factory singleton before each test."""
    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def settings():
    return Settings(document_db=DocumentDBSettings(host="db", port=27018, database="test_db"))


class TestInfrastructureFactory:
    """Tests for InfrastructureFactory."""

    def test_factory_init(self, settings):
        factory = InfrastructureFactory(settings)
        assert factory._settings is settings
        assert factory._instances == {}

    def test_get_document_db_without_credentials(self, settings):
        with patch("hls_ingest.infrastructure.factory.MongoDBDocumentDB") as mock_cls:
            factory = InfrastructureFactory(settings)
            db = factory.get_document_db()

            mock_cls.assert_called_once_with(
                connection_string="mongodb://db:27018",
                database_name="test_db",
            )
            assert db is mock_cls.return_value

    def test_get_document_db_with_credentials(self):
        settings = Settings(
            document_db=DocumentDBSettings(
                host="db", username="user", password="secret", auth_source="admin"
            )
        )
        with patch("hls_ingest.infrastructure.factory.MongoDBDocumentDB") as mock_cls:
            InfrastructureFactory(settings).get_document_db()

            connection_string = mock_cls.call_args.kwargs["connection_string"]
            assert connection_string == "mongodb://user:secret@db:27017/?authSource=admin"

    def test_document_db_is_cached(self, settings):
        with patch("hls_ingest.infrastructure.factory.MongoDBDocumentDB"):
            factory = InfrastructureFactory(settings)
            assert factory.get_document_db() is factory.get_document_db()

    def test_get_process_invoker(self, settings):
        factory = InfrastructureFactory(settings)
        invoker = factory.get_process_invoker()
        assert isinstance(invoker, SubprocessInvoker)
        assert factory.get_process_invoker() is invoker

    async def test_close_all(self, settings):
        with patch("hls_ingest.infrastructure.factory.MongoDBDocumentDB") as mock_cls:
            mock_cls.return_value.close = AsyncMock()
            factory = InfrastructureFactory(settings)
            factory.get_document_db()
            factory.get_process_invoker()

            await factory.close_all()

            mock_cls.return_value.close.assert_awaited_once()
            assert factory._instances == {}

    async def test_close_all_survives_failing_provider(self, settings):
        factory = InfrastructureFactory(settings)
        broken = MagicMock()
        broken.close = AsyncMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        healthy.close = AsyncMock()
        factory._instances = {"broken": broken, "healthy": healthy}

        await factory.close_all()

        healthy.close.assert_awaited_once()
        assert factory._instances == {}


class TestFactorySingleton:
    """Tests for the module-level factory accessor."""

    def test_requires_settings_on_first_call(self):
        with pytest.raises(ValueError, match="Settings required"):
            get_factory()

    def test_returns_same_instance(self, settings):
        factory = get_factory(settings)
        assert get_factory() is factory

    def test_reset(self, settings):
        factory = get_factory(settings)
        reset_factory()
        assert get_factory(settings) is not factory
