"""
Database session management.

Provides the async SQLAlchemy engine and session factory.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from candle_space_web.config import settings

# Configure engine based on database type
if settings.use_sqlite:
    # SQLite configuration (for development), no pooling options
    async_engine = create_async_engine(
        settings.database_url,
        echo=settings.sql_echo,
    )
else:
    # PostgreSQL configuration (production)
    async_engine = create_async_engine(
        settings.database_url,
        pool_size=5,
        max_overflow=10,
        pool_recycle=1800,
        pool_pre_ping=True,
        echo=settings.sql_echo,
    )

async_session_maker = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session per request, rolled back if the request fails."""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Initialize database tables."""
    from candle_space_web.db.models import Base

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db() -> None:
    """Drop all database tables (use with caution)."""
    from candle_space_web.db.models import Base

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
