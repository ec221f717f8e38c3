"""Request/response schemas for the Candle Space Web API."""

from .enums import CandleStyle
from .models import CandleCreate, CandleRead, CandleUpdate

__all__ = [
    "CandleCreate",
    "CandleRead",
    "CandleStyle",
    "CandleUpdate",
]
