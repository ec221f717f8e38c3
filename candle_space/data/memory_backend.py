"""
In-memory implementation of the candle store.

Used for offline sessions and tests. Assigns integer ids and UTC timestamps
like the real store does.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from copy import copy
from datetime import UTC, datetime
from itertools import count
from threading import Lock
from typing import TYPE_CHECKING, Any

from candle_space.core.constants import CandleField
from candle_space.core.dataclasses import Candle, parse_timestamp
from candle_space.core.exceptions import CreateFailedError, ErrorCodes, PersistFailedError, ValidationError
from candle_space.core.validation import InputValidator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from candle_space.core.dataclasses import CandleDraft

logger = logging.getLogger(__name__)


class InMemoryCandleBackend:
    """Thread-safe in-memory candles collection."""

    def __init__(self, clock: Callable[[], datetime] | None = None, seed: Sequence[Candle] = ()) -> None:
        self._lock = Lock()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._rows: dict[int | str, Candle] = {c.id: copy(c) for c in seed}
        numeric_ids = [c.id for c in seed if isinstance(c.id, int)]
        self._ids = count(max(numeric_ids, default=0) + 1)

    def create(self, drafts: Sequence[CandleDraft]) -> list[Candle]:
        if not drafts:
            msg = "Nothing to create"
            raise CreateFailedError(msg, ErrorCodes.MISSING_REQUIRED)

        with self._lock:
            created = [
                Candle(
                    id=next(self._ids),
                    x=draft.x,
                    y=draft.y,
                    created_at=parse_timestamp(self._clock()),
                    note=draft.note,
                    country_code=draft.country_code,
                    style=draft.style,
                )
                for draft in drafts
            ]
            for candle in created:
                self._rows[candle.id] = candle

        logger.debug("Created %d candle(s) in memory", len(created))
        return [copy(c) for c in created]

    def update(self, candle_id: int | str, fields: dict[str, Any]) -> None:
        try:
            update = InputValidator.validate_mutable_fields(fields)
            if CandleField.STYLE in update:
                update[CandleField.STYLE] = InputValidator.parse_style(update[CandleField.STYLE])
        except ValidationError as e:
            raise PersistFailedError(e.message, ErrorCodes.STORE_REJECTED) from e

        with self._lock:
            row = self._rows.get(candle_id)
            if row is None:
                msg = f"Candle {candle_id} not found"
                raise PersistFailedError(msg, ErrorCodes.NOT_FOUND, {"candle_id": candle_id})
            for name, value in update.items():
                setattr(row, name, value)

    def list_candles(self, since: datetime | None = None) -> list[Candle]:
        with self._lock:
            rows = [copy(c) for c in self._rows.values()]

        if since is not None:
            cutoff = parse_timestamp(since)
            rows = [c for c in rows if c.created_at >= cutoff]
        return sorted(rows, key=lambda c: (c.created_at, str(c.id)))
