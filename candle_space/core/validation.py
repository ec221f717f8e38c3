#!/usr/bin/env python3
"""
Input Validation Module for Candle Space
Provides validation and normalization for user and store inputs.
"""

from __future__ import annotations

import math
from typing import Any, ClassVar

from candle_space.core.constants import MUTABLE_FIELDS, CandleField, CanvasLimits, MarkerStyle
from candle_space.core.exceptions import ErrorCodes, ValidationError


class InputValidator:
    """Input validation for Candle Space."""

    COUNTRY_CODE_FIELDS: ClassVar[set[str]] = {CandleField.COUNTRY_CODE}

    @staticmethod
    def truncate_note(text: str | None, max_length: int = CanvasLimits.MAX_NOTE_LENGTH) -> str:
        """
        Truncate a note to max_length characters.

        Never raises on over-length input. Truncating an already truncated
        string returns it unchanged.
        """
        if not text:
            return ""
        return text[:max_length]

    @staticmethod
    def validate_world_position(
        x: float,
        y: float,
        world_width: float = CanvasLimits.WORLD_WIDTH,
        world_height: float = CanvasLimits.WORLD_HEIGHT,
    ) -> tuple[float, float]:
        """
        Validate a world-space position.

        Raises:
            ValidationError: If the position is not finite or lies outside the world

        """
        if not (math.isfinite(x) and math.isfinite(y)):
            msg = f"Position must be finite, got ({x}, {y})"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        if not (0 <= x <= world_width and 0 <= y <= world_height):
            msg = f"Position ({x}, {y}) outside world {world_width}x{world_height}"
            raise ValidationError(msg, ErrorCodes.OUT_OF_RANGE)
        return (x, y)

    @staticmethod
    def validate_country_code(code: str | None, max_length: int = CanvasLimits.MAX_COUNTRY_CODE_LENGTH) -> str:
        """Validate a country/style tag. Empty means no tag."""
        if not code:
            return ""
        code = code.strip()
        if len(code) > max_length:
            msg = f"Country code too long: {len(code)} > {max_length}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        return code

    @staticmethod
    def parse_style(value: str | MarkerStyle | None) -> MarkerStyle | None:
        """Parse a style value, None for unset."""
        if value is None or value == "":
            return None
        try:
            return MarkerStyle(value)
        except ValueError as e:
            msg = f"Unknown candle style: {value!r}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT) from e

    @staticmethod
    def validate_mutable_fields(update: dict[str, Any]) -> dict[str, Any]:
        """
        Check that an update only touches fields that may change after creation.

        Raises:
            ValidationError: If the update names id, position or created_at

        """
        illegal = set(update) - MUTABLE_FIELDS
        if illegal:
            msg = f"Fields cannot be changed after creation: {sorted(illegal)}"
            raise ValidationError(msg, ErrorCodes.IMMUTABLE_FIELD)
        return dict(update)
