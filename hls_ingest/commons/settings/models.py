"""Pydantic settings models for application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseModel):
    """Application-level settings."""

    name: str = "hls-ingest"
    version: str = "0.1.0"
    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class ServerSettings(BaseModel):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=2000, ge=1, le=65535)
    workers: int = Field(default=1, ge=1, le=32)
    reload: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    api_prefix: str = "/api"
    docs_enabled: bool = True


class StorageSettings(BaseModel):
    """Local disk layout for uploads and produced renditions."""

    uploads_dir: str = "./uploads"
    output_dir: str = "./hls-output"
    public_base_url: str = "http://localhost:2000"
    static_mount_path: str = "/hls-output"


class DocumentCollectionSettings(BaseModel):
    """Document DB collection names."""

    assets: str = "assets"


class DocumentDBSettings(BaseModel):
    """Document database settings (MongoDB)."""

    provider: Literal["mongodb"] = "mongodb"
    host: str = "127.0.0.1"
    port: int = 27017
    username: str = ""
    password: str = ""
    database: str = "videoDB"
    auth_source: str = "admin"
    collections: DocumentCollectionSettings = Field(
        default_factory=DocumentCollectionSettings
    )


class TranscodingSettings(BaseModel):
    """External transcoder (ffmpeg) settings."""

    ffmpeg_path: str = "ffmpeg"
    preset: str = "fast"
    segment_seconds: int = Field(default=10, ge=1, le=60)
    job_timeout_seconds: float | None = Field(default=None, gt=0)
    profiles: list[str] | None = Field(
        default=None,
        description="Subset of catalog profile names to encode, None for all",
    )
    thumbnail_policy: Literal["optional", "required"] = "optional"


class ThumbnailSettings(BaseModel):
    """Preview thumbnail capture settings."""

    seek_seconds: float = Field(default=2.0, ge=0)
    width: int = Field(default=320, ge=16, le=3840)
    height: int = Field(default=180, ge=16, le=2160)
    filename: str = "thumbnail.jpg"


class UploadSettings(BaseModel):
    """Upload validation settings."""

    max_size_mb: int = Field(default=500, ge=1)
    chunk_size_bytes: int = Field(default=1024 * 1024, ge=1024)
    allowed_content_types: list[str] = Field(
        default_factory=lambda: [
            "video/mp4",
            "video/mkv",
            "video/x-matroska",
            "video/webm",
        ]
    )


class TelemetrySettings(BaseModel):
    """Logging settings."""

    log_format: Literal["json", "text"] = "json"
    log_level: str = "INFO"


class Settings(BaseSettings):
    """Root settings container with environment loading."""

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    document_db: DocumentDBSettings = Field(default_factory=DocumentDBSettings)
    transcoding: TranscodingSettings = Field(default_factory=TranscodingSettings)
    thumbnail: ThumbnailSettings = Field(default_factory=ThumbnailSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HLS_INGEST__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
