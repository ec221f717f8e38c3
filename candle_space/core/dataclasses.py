#!/usr/bin/env python3
"""Candle and canvas geometry dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from candle_space.core.constants import CandleField, MarkerStyle
from candle_space.core.exceptions import ErrorCodes, ValidationError


def parse_timestamp(value: datetime | str) -> datetime:
    """
    Normalize a store timestamp to an aware UTC datetime.

    Accepts datetime objects or ISO-8601 strings. A trailing "Z" and naive
    values are both read as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError as e:
            msg = f"Invalid timestamp: {value!r}"
            raise ValidationError(msg, ErrorCodes.INVALID_FORMAT) from e

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


@dataclass
class Candle:
    """A persisted point annotation on the shared canvas."""

    id: int | str
    x: float
    y: float
    created_at: datetime
    note: str = ""
    country_code: str = ""
    style: MarkerStyle | None = None

    @property
    def position(self) -> tuple[float, float]:
        """World-space position, set once at creation."""
        return (self.x, self.y)

    @property
    def has_note(self) -> bool:
        return bool(self.note)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the row shape used by the remote store."""
        return {
            CandleField.ID: self.id,
            CandleField.X: self.x,
            CandleField.Y: self.y,
            CandleField.NOTE: self.note,
            CandleField.COUNTRY_CODE: self.country_code,
            CandleField.STYLE: self.style.value if self.style else None,
            CandleField.CREATED_AT: self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Candle:
        """Create from a remote store row."""
        try:
            candle_id = data[CandleField.ID]
            x = float(data[CandleField.X])
            y = float(data[CandleField.Y])
            created_at = parse_timestamp(data[CandleField.CREATED_AT])
            style_value = data.get(CandleField.STYLE)
            style = MarkerStyle(style_value) if style_value else None
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Malformed candle row: {data!r}"
            raise ValidationError(msg, ErrorCodes.INVALID_FORMAT) from e

        return cls(
            id=candle_id,
            x=x,
            y=y,
            created_at=created_at,
            note=data.get(CandleField.NOTE) or "",
            country_code=data.get(CandleField.COUNTRY_CODE) or "",
            style=style,
        )


@dataclass(frozen=True)
class CandleDraft:
    """Create payload for a new candle. Note and country are always empty at creation."""

    x: float
    y: float
    style: MarkerStyle | None = None
    note: str = ""
    country_code: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the insert payload for the remote store."""
        payload: dict[str, Any] = {
            CandleField.X: self.x,
            CandleField.Y: self.y,
            CandleField.NOTE: self.note,
            CandleField.COUNTRY_CODE: self.country_code,
        }
        if self.style is not None:
            payload[CandleField.STYLE] = self.style.value
        return payload


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen or world space."""

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        """Check if a point lies inside (edges inclusive)."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class ScrollOffset:
    """Scroll position of the world canvas inside its viewport."""

    x: float = 0.0
    y: float = 0.0
