"""Settings persistence backed by a YAML file."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubedash.constants.values import CONFIG_DIR_NAME, SETTINGS_FILE_NAME
from kubedash.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """Load and save AppSettings."""

    @staticmethod
    def default_path() -> Path:
        return Path.home() / CONFIG_DIR_NAME / SETTINGS_FILE_NAME

    @classmethod
    def load(cls, path: Path | None = None) -> AppSettings:
        """Load settings, returning defaults when no file exists.

        Raises:
            ConfigLoadError: The file exists but cannot be read or validated.
        """
        settings_path = path or cls.default_path()
        if not settings_path.exists():
            logger.debug("No settings file at %s, using defaults", settings_path)
            return AppSettings()
        try:
            raw = yaml.safe_load(settings_path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Cannot read {settings_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"{settings_path} must contain a mapping")
        try:
            return AppSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {settings_path}: {exc}") from exc

    @classmethod
    def save(cls, settings: AppSettings, path: Path | None = None) -> Path:
        """Write settings as YAML and return the path written."""
        settings_path = path or cls.default_path()
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            settings_path.write_text(
                yaml.safe_dump(settings.model_dump(), sort_keys=True),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigSaveError(f"Cannot write {settings_path}: {exc}") from exc
        return settings_path


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]
