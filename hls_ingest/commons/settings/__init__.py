"""Settings management module."""

from hls_ingest.commons.settings.loader import (
    SettingsLoader,
    get_settings,
    reset_settings,
)
from hls_ingest.commons.settings.models import (
    AppSettings,
    DocumentCollectionSettings,
    DocumentDBSettings,
    ServerSettings,
    Settings,
    StorageSettings,
    TelemetrySettings,
    ThumbnailSettings,
    TranscodingSettings,
    UploadSettings,
)

__all__ = [
    # Loader
    "SettingsLoader",
    "get_settings",
    "reset_settings",
    # Main settings
    "Settings",
    "AppSettings",
    "ServerSettings",
    # Storage
    "StorageSettings",
    "DocumentDBSettings",
    "DocumentCollectionSettings",
    # Processing
    "TranscodingSettings",
    "ThumbnailSettings",
    "UploadSettings",
    # Telemetry
    "TelemetrySettings",
]
