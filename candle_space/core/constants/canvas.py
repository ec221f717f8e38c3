"""
Canvas-related constants for Candle Space.

Contains enums and limits for candle styles, the placement state machine,
anchoring of transient UI, and the shape of rows in the remote store.
"""

from enum import StrEnum


class MarkerStyle(StrEnum):
    """
    Visual style of a candle, chosen when it is placed.

    Attributes:
        REGULAR: Standard candle (30 x 60)
        TALL: Taller pillar candle (30 x 90)
        WIDE: Wide block candle (60 x 60)

    """

    REGULAR = "regular"
    TALL = "tall"
    WIDE = "wide"

    @classmethod
    def get_default(cls) -> "MarkerStyle":
        """Get the default style used when a deployment offers a single visual."""
        return cls.REGULAR

    def get_display_name(self) -> str:
        """Get human-readable display name."""
        names = {
            MarkerStyle.REGULAR: "Candle",
            MarkerStyle.TALL: "Tall candle",
            MarkerStyle.WIDE: "Wide candle",
        }
        return names.get(self, self.value)

    def footprint(self) -> tuple[int, int]:
        """Get the (width, height) the candle occupies on the canvas."""
        return _FOOTPRINTS[self]


_FOOTPRINTS: dict[MarkerStyle, tuple[int, int]] = {
    MarkerStyle.REGULAR: (30, 60),
    MarkerStyle.TALL: (30, 90),
    MarkerStyle.WIDE: (60, 60),
}


class PlacementPhase(StrEnum):
    """Phases of the arm/place interaction."""

    IDLE = "idle"
    ARMED = "armed"
    AWAITING_COMMIT = "awaiting_commit"


class LoadStatus(StrEnum):
    """Status of the initial fetch of all candles."""

    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class AnchorMode(StrEnum):
    """How a transient rectangle is anchored to a candle's screen position."""

    ABOVE = "above"
    BELOW = "below"
    OFFSET = "offset"


class BackendKind(StrEnum):
    """Available remote store implementations."""

    MEMORY = "memory"
    HTTP = "http"


class CandleField(StrEnum):
    """Column names of a row in the remote candles collection."""

    ID = "id"
    X = "x"
    Y = "y"
    NOTE = "note"
    COUNTRY_CODE = "country_code"
    STYLE = "style"
    CREATED_AT = "created_at"


# Fields an annotation submit may change on an existing row
MUTABLE_FIELDS: frozenset[str] = frozenset({CandleField.NOTE, CandleField.COUNTRY_CODE, CandleField.STYLE})


class CanvasLimits:
    """Numeric defaults for the shared canvas."""

    WORLD_WIDTH = 3000
    WORLD_HEIGHT = 2000
    MAX_NOTE_LENGTH = 200
    MAX_COUNTRY_CODE_LENGTH = 8

    # Transient UI
    TOOLTIP_WIDTH = 220
    TOOLTIP_HEIGHT = 80
    TOOLTIP_MARGIN = 8
    TOOLTIP_OFFSET_X = 20
    TOOLTIP_OFFSET_Y = -30
    POPOVER_WIDTH = 400
    POPOVER_HEIGHT = 300
    POPOVER_GAP = 12

    # Persist retry
    RETRY_BASE_DELAY_SECONDS = 2.0
    RETRY_MAX_DELAY_SECONDS = 60.0
    RETRY_TIMER_INTERVAL_MS = 1000
