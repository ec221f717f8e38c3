"""
String enums for the Candle Space Web API.

Mirrors the desktop client's MarkerStyle; these values are what the
candles table stores.
"""

from enum import StrEnum


class CandleStyle(StrEnum):
    """Visual style of a candle, fixed when it is placed."""

    REGULAR = "regular"
    TALL = "tall"
    WIDE = "wide"
