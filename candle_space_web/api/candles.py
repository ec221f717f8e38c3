"""
Candle API endpoints for the shared canvas.

Create, list and update candles. There is no delete.

Note: We intentionally avoid `from __future__ import annotations` here
because FastAPI's dependency injection needs actual types, not string
annotations. Using Annotated types requires runtime resolution.
"""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import select

from candle_space_web.api.deps import DbSession
from candle_space_web.db.models import Candle
from candle_space_web.schemas import CandleCreate, CandleRead, CandleUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def to_naive_utc(dt: datetime) -> datetime:
    """Convert an aware timestamp to the naive UTC form stored in the table."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(UTC).replace(tzinfo=None)


@router.post("", response_model=list[CandleRead], status_code=status.HTTP_201_CREATED)
async def create_candles(candles: list[CandleCreate], db: DbSession) -> list[CandleRead]:
    """
    Insert a batch of candles.

    The whole batch is inserted or nothing is. Returns the inserted rows with
    their assigned id and created_at.
    """
    if not candles:
        raise HTTPException(status_code=422, detail="No candles to create")

    rows = [
        Candle(
            x=candle.x,
            y=candle.y,
            note=candle.note,
            country_code=candle.country_code,
            style=candle.style.value if candle.style else None,
        )
        for candle in candles
    ]
    db.add_all(rows)
    await db.commit()
    for row in rows:
        await db.refresh(row)

    logger.info("Created %d candle(s): %s", len(rows), [row.id for row in rows])
    return [CandleRead.model_validate(row) for row in rows]


@router.get("", response_model=list[CandleRead])
async def list_candles(
    db: DbSession,
    since: Annotated[datetime | None, Query(description="Only candles created at or after this time")] = None,
) -> list[CandleRead]:
    """List candles ordered by created_at ascending, then id."""
    query = select(Candle).order_by(Candle.created_at.asc(), Candle.id.asc())
    if since is not None:
        query = query.where(Candle.created_at >= to_naive_utc(since))

    result = await db.execute(query)
    return [CandleRead.model_validate(row) for row in result.scalars().all()]


@router.patch("/{candle_id}", response_model=CandleRead)
async def update_candle(candle_id: int, update: CandleUpdate, db: DbSession) -> CandleRead:
    """Set the note and/or country code of a candle. Last writer wins."""
    result = await db.execute(select(Candle).where(Candle.id == candle_id))
    candle = result.scalar_one_or_none()
    if candle is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candle not found")

    changes = update.model_dump(exclude_none=True)
    for field, value in changes.items():
        setattr(candle, field, value)
    await db.commit()
    await db.refresh(candle)

    logger.info("Updated candle %d: %s", candle_id, sorted(changes))
    return CandleRead.model_validate(candle)
