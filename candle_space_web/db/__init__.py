"""Database layer: ORM models and async session management."""

from .models import Base, Candle
from .session import async_engine, async_session_maker, drop_db, get_async_session, init_db

__all__ = [
    "Base",
    "Candle",
    "async_engine",
    "async_session_maker",
    "drop_db",
    "get_async_session",
    "init_db",
]
