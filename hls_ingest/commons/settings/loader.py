"""Layered settings loader: JSON files overlaid by environment variables."""

import json
import os
from pathlib import Path
from typing import Any

from hls_ingest.commons.settings.models import Settings

ENV_PREFIX = "HLS_INGEST__"
CONFIG_DIR_ENV = "HLS_INGEST_CONFIG_DIR"


class SettingsLoader:
    """Resolves a Settings instance from several sources.

    Precedence, highest first:
    1. ``HLS_INGEST__SECTION__KEY`` environment variables
    2. ``appsettings.{environment}.json``
    3. ``appsettings.json``
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        environment: str | None = None,
    ) -> None:
        """Create a loader.

        Args:
            config_dir: Directory holding the appsettings files. Falls back to
                ``HLS_INGEST_CONFIG_DIR`` and then ``./config``.
            environment: Environment name used to pick the overlay file.
                Falls back to ``HLS_INGEST__APP__ENVIRONMENT`` and then ``dev``.
        """
        self.config_dir = config_dir or Path(os.getenv(CONFIG_DIR_ENV, "config"))
        self.environment = environment or os.getenv(
            f"{ENV_PREFIX}APP__ENVIRONMENT", "dev"
        )

    def load(self) -> Settings:
        """Merge all sources and validate them into Settings."""
        config = self._read_file("appsettings.json")
        config = _deep_merge(
            config, self._read_file(f"appsettings.{self.environment}.json")
        )
        config = _deep_merge(config, self._env_overrides())
        return Settings(**config)

    def _read_file(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename
        if not path.exists():
            return {}
        with path.open(encoding="utf-8") as f:
            return dict(json.load(f))

    def _env_overrides(self) -> dict[str, Any]:
        """Turn ``HLS_INGEST__STORAGE__OUTPUT_DIR=x`` into ``{"storage": {"output_dir": x}}``."""
        result: dict[str, Any] = {}
        for key, raw in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX) :].lower().split("__")
            node = result
            for part in parts[:-1]:
                node = node.setdefault(part, {})
            node[parts[-1]] = _coerce(raw)
        return result


def _coerce(value: str) -> Any:
    """Best-effort conversion of an environment string to bool/int/float/JSON."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"

    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue

    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = base.copy()
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


_settings: Settings | None = None


def get_settings(
    config_dir: Path | None = None,
    environment: str | None = None,
    *,
    reload: bool = False,
) -> Settings:
    """Return the process-wide Settings, loading them on first use.

    Args:
        config_dir: Optional config directory override.
        environment: Optional environment override.
        reload: Force a fresh load.
    """
    global _settings  # noqa: PLW0603
    if _settings is None or reload:
        _settings = SettingsLoader(config_dir=config_dir, environment=environment).load()
    return _settings


def reset_settings() -> None:
    """Drop the cached Settings so the next call reloads them."""
    global _settings  # noqa: PLW0603
    _settings = None
