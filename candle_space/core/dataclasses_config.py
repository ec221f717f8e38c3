#!/usr/bin/env python3
"""Configuration-related dataclasses."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import UTC, datetime, timedelta
from typing import Any

from candle_space.core.constants import BackendKind, CanvasLimits, MarkerStyle
from candle_space.core.exceptions import ConfigurationError, ErrorCodes


@dataclass
class AppConfig:
    """
    Application configuration settings with hardcoded defaults.

    The product-policy choices that differ between deployments are named here
    rather than inferred: note length, freshness window of the initial load,
    whether shared notes can be reopened, and which candle styles are offered.
    """

    # Canvas
    world_width: int = CanvasLimits.WORLD_WIDTH
    world_height: int = CanvasLimits.WORLD_HEIGHT

    # Product policy
    max_note_length: int = CanvasLimits.MAX_NOTE_LENGTH
    freshness_window_hours: float | None = None  # None = all-time
    allow_reopen: bool = False
    enabled_styles: list[str] = field(default_factory=lambda: [MarkerStyle.REGULAR.value])
    alert_on_create_failure: bool = True

    # Transient UI
    tooltip_width: int = CanvasLimits.TOOLTIP_WIDTH
    tooltip_height: int = CanvasLimits.TOOLTIP_HEIGHT
    tooltip_margin: int = CanvasLimits.TOOLTIP_MARGIN
    tooltip_offset_x: int = CanvasLimits.TOOLTIP_OFFSET_X
    tooltip_offset_y: int = CanvasLimits.TOOLTIP_OFFSET_Y
    popover_width: int = CanvasLimits.POPOVER_WIDTH
    popover_height: int = CanvasLimits.POPOVER_HEIGHT
    popover_gap: int = CanvasLimits.POPOVER_GAP

    # Remote store
    backend: str = BackendKind.MEMORY.value
    backend_url: str = "http://localhost:8000"
    api_prefix: str = "/api/v1"
    request_timeout_seconds: float = 10.0

    # Persist retry
    retry_base_delay_seconds: float = CanvasLimits.RETRY_BASE_DELAY_SECONDS
    retry_max_delay_seconds: float = CanvasLimits.RETRY_MAX_DELAY_SECONDS

    # Window
    window_width: int = 1200
    window_height: int = 800

    @property
    def styles(self) -> tuple[MarkerStyle, ...]:
        """Enabled styles as enum members."""
        return tuple(MarkerStyle(s) for s in self.enabled_styles)

    @property
    def is_multi_style(self) -> bool:
        return len(self.enabled_styles) > 1

    def freshness_cutoff(self, now: datetime | None = None) -> datetime | None:
        """Get the earliest created_at to load, or None for all-time."""
        if self.freshness_window_hours is None:
            return None
        now = now or datetime.now(UTC)
        return now - timedelta(hours=self.freshness_window_hours)

    def validate(self) -> AppConfig:
        """
        Validate configuration values.

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: If any value is out of range

        """
        if self.world_width <= 0 or self.world_height <= 0:
            msg = f"World extent must be positive, got {self.world_width}x{self.world_height}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
        if self.max_note_length <= 0:
            msg = f"max_note_length must be positive, got {self.max_note_length}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
        if self.freshness_window_hours is not None and self.freshness_window_hours <= 0:
            msg = f"freshness_window_hours must be positive or None, got {self.freshness_window_hours}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
        if not self.enabled_styles:
            msg = "At least one candle style must be enabled"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_MISSING)
        try:
            self.styles  # noqa: B018
        except ValueError as e:
            msg = f"Unknown candle style in {self.enabled_styles}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID) from e
        if self.backend not in {kind.value for kind in BackendKind}:
            msg = f"Unknown backend: {self.backend}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
        if self.retry_base_delay_seconds <= 0 or self.retry_max_delay_seconds < self.retry_base_delay_seconds:
            msg = "Retry delays must be positive and max >= base"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for settings storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def create_default(cls) -> AppConfig:
        """Create config with all defaults."""
        return cls()
