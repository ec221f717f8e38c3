#!/usr/bin/env python3
"""
Configuration Manager for Candle Space
Handles loading and saving of application settings using QSettings.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from threading import Lock
from typing import Any

from PyQt6.QtCore import QSettings

from candle_space.core.dataclasses_config import AppConfig
from candle_space.core.exceptions import ConfigurationError, ErrorCodes

# Configure logging
logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "yes", "on"}


def _coerce(name: str, default: Any, value: Any) -> Any:
    """Convert a raw QSettings value to the type of the AppConfig default."""
    try:
        if isinstance(default, bool):
            return value if isinstance(value, bool) else str(value).strip().lower() in _TRUE_STRINGS
        if isinstance(default, int):
            return int(value)
        if isinstance(default, float) or default is None:
            return None if value in ("", "none", "None") else float(value)
        if isinstance(default, list):
            if isinstance(value, str):
                return [item for item in value.split("|") if item]
            return [str(item) for item in value]
        return str(value)
    except (TypeError, ValueError) as e:
        msg = f"Invalid value for {name}: {value!r}"
        raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID) from e


class ConfigManager:
    """Manages application configuration using QSettings."""

    def __init__(self, settings: QSettings | None = None) -> None:
        self._lock = Lock()
        self.settings = settings if settings is not None else QSettings("CandleSpace", "CandleSpaceApp")
        self.config: AppConfig | None = None
        self.config = self.try_load_config()

    def is_config_valid(self) -> bool:
        """Check if configuration is valid without throwing exceptions."""
        return self.config is not None

    def try_load_config(self) -> AppConfig | None:
        """Try to load configuration, return None if invalid instead of throwing."""
        try:
            return self.load_config()
        except ConfigurationError as e:
            logger.warning("Failed to load configuration: %s", e)
            return None

    def load_config(self) -> AppConfig:
        """
        Load overrides from QSettings on top of the hardcoded defaults.

        Raises:
            ConfigurationError: If a stored value cannot be used

        """
        with self._lock:
            config = AppConfig.create_default()
            for config_field in fields(AppConfig):
                if not self.settings.contains(config_field.name):
                    continue
                raw = self.settings.value(config_field.name)
                default = getattr(config, config_field.name)
                setattr(config, config_field.name, _coerce(config_field.name, default, raw))
            config.validate()
            logger.debug("Configuration loaded: backend=%s, allow_reopen=%s", config.backend, config.allow_reopen)
            return config

    def save_config(self, config: AppConfig) -> None:
        """Validate and persist every setting."""
        config.validate()
        with self._lock:
            for key, value in config.to_dict().items():
                if value is None:
                    self.settings.remove(key)
                elif isinstance(value, list):
                    self.settings.setValue(key, "|".join(value))
                else:
                    self.settings.setValue(key, value)
            self.settings.sync()
        self.config = config
        logger.info("Configuration saved")

    def update_config(self, **changes: Any) -> AppConfig:
        """Apply changes to the current configuration and save it."""
        base = self.config or AppConfig.create_default()
        updated = AppConfig.from_dict({**base.to_dict(), **changes})
        self.save_config(updated)
        return updated

    def reset_to_defaults(self) -> AppConfig:
        with self._lock:
            self.settings.clear()
            self.settings.sync()
        self.config = AppConfig.create_default()
        return self.config
