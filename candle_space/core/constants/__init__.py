"""
Constants for Candle Space.

This package provides centralized definitions for string enums,
numeric limits and user-facing text used throughout the application.

The constants are organized into domain-specific modules:
- canvas: Candle styles, placement phases, anchoring, store row fields
- ui: User interface text, messages and styling

All constants are re-exported from this __init__.py:

    from candle_space.core.constants import MarkerStyle, PlacementPhase
"""

from .canvas import (
    MUTABLE_FIELDS,
    AnchorMode,
    BackendKind,
    CandleField,
    CanvasLimits,
    LoadStatus,
    MarkerStyle,
    PlacementPhase,
)
from .ui import (
    ButtonText,
    ColorPalette,
    ErrorMessage,
    LabelText,
    StatusTimeout,
    StyleSheet,
    WindowTitle,
)

__all__ = [
    "MUTABLE_FIELDS",
    "AnchorMode",
    "BackendKind",
    "ButtonText",
    "CandleField",
    "CanvasLimits",
    "ColorPalette",
    "ErrorMessage",
    "LabelText",
    "LoadStatus",
    "MarkerStyle",
    "PlacementPhase",
    "StatusTimeout",
    "StyleSheet",
    "WindowTitle",
]
