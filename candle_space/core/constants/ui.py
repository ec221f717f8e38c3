"""
User interface constants for Candle Space.

Contains text, titles, messages and style sheets used by the desktop client.
"""

from enum import StrEnum


class WindowTitle(StrEnum):
    """Window and dialog titles."""

    MAIN_WINDOW = "Light a Candle · space"
    CREATE_FAILED = "Candle Not Lit"
    LOAD_FAILED = "Could Not Load Candles"


class ButtonText(StrEnum):
    """Button text constants."""

    PLACE = "Light a candle"
    PLACE_STYLE = "Light a {}"
    CANCEL_PLACEMENT = "Cancel"
    SHARE = "Share Letter"


class LabelText(StrEnum):
    """Static and formatted label text."""

    TOTAL_CANDLES = "Total candles: {}"
    NOTE_COUNTER = "{}/{}"
    UNSAVED = "{} unsaved"
    ANNOTATION_HEADING = "Write your letter"
    NOTE_PLACEHOLDER = "Your message…"
    COUNTRY_PLACEHOLDER = "Select country"
    PLACEMENT_HINT = "Click to light your candle,\nplace it anywhere in this space,\nwrite a note or read one."
    ARMED_HINT = "Click anywhere in the space to place your candle (Esc to cancel)"


class ErrorMessage(StrEnum):
    """Error messages."""

    CREATE_FAILED = "Your candle could not be lit: {}"
    LOAD_FAILED = "Candles could not be loaded: {}"
    PERSIST_FAILED = "Your letter has not been saved yet and will be retried: {}"


class StatusTimeout:
    """Status bar message durations in milliseconds."""

    SHORT = 3000
    LONG = 8000


class ColorPalette:
    """Colours shared by the canvas painter and popovers."""

    BACKGROUND = "#ffffff"
    WAX = "#f3e6cf"
    WAX_OUTLINE = "#d9c3a0"
    FLAME = "#f4a020"
    FLAME_CORE = "#fff1b8"
    GHOST_ALPHA = 110
    TOOLTIP_BACKGROUND = "#f9f5f0"
    TOOLTIP_TEXT = "#5a3e2b"
    ACCENT = "#d2691e"


class StyleSheet:
    """Qt style sheets."""

    TOOLTIP = (
        "QLabel { background: #f9f5f0; color: #5a3e2b; padding: 12px 16px;"
        " border-radius: 6px; font-size: 14px; }"
    )
    POPOVER = "QFrame#annotationPopover { background: #ffffff; border-radius: 8px; }"
    SHARE_BUTTON = (
        "QPushButton { padding: 8px 16px; background: #d2691e; color: #ffffff;"
        " border: none; border-radius: 4px; }"
    )
    COUNT_LABEL = "QLabel { background: rgba(255, 255, 255, 200); padding: 6px 10px; border-radius: 4px; }"
    BACKDROP = "QWidget { background: rgba(0, 0, 0, 100); }"
