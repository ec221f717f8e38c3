"""
FastAPI dependencies for injection.

Provides database sessions.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from candle_space_web.db.session import get_async_session

# Database session dependency (overridden in tests)
get_db = get_async_session


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
