"""Remote candle store implementations."""

from candle_space.data.factory import create_backend
from candle_space.data.http_backend import HttpCandleBackend
from candle_space.data.memory_backend import InMemoryCandleBackend
from candle_space.data.protocol import CandleBackend

__all__ = [
    "CandleBackend",
    "HttpCandleBackend",
    "InMemoryCandleBackend",
    "create_backend",
]
