#!/usr/bin/env python3
"""
Candle Cache for Candle Space
Client-side mirror of the remote candles collection.

The cache is the only mutable shared state of a session. It is written by the
placement and annotation workflows only; every other component reads it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from candle_space.core.constants import CandleField
from candle_space.core.exceptions import ErrorCodes, ValidationError
from candle_space.core.validation import InputValidator
from candle_space.services.task_runner import StoreResult, run_store_call

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from candle_space.core.dataclasses import Candle
    from candle_space.data.protocol import CandleBackend

logger = logging.getLogger(__name__)


class CandleCache:
    """
    Ordered, append-only sequence of candles mirroring the remote store.

    Insertion order reflects created_at ascending as loaded. In-place
    mutation of note/country_code never moves a candle or changes its id.
    """

    def __init__(self) -> None:
        self._candles: list[Candle] = []
        self._index_by_id: dict[int | str, int] = {}

    def __len__(self) -> int:
        return len(self._candles)

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    @property
    def candles(self) -> tuple[Candle, ...]:
        """Read-only snapshot of the cached candles."""
        return tuple(self._candles)

    def count(self) -> int:
        return len(self._candles)

    def load_all(self, backend: CandleBackend, since: datetime | None = None) -> StoreResult[int]:
        """
        Fetch every candle and replace the cache.

        On failure the existing cache is left untouched and the LoadFailed
        error is returned to the caller. There is no retry.
        """
        result = run_store_call(lambda: backend.list_candles(since=since))
        if not result.ok:
            return StoreResult.failure(result.error)
        self.replace_all(result.value)
        return StoreResult.success(self.count())

    def replace_all(self, candles: Iterable[Candle]) -> None:
        """Replace the entire cache with freshly loaded candles."""
        self._candles = list(candles)
        self._index_by_id = {c.id: i for i, c in enumerate(self._candles)}
        logger.info("Candle cache loaded with %d candles", len(self._candles))

    def append(self, candle: Candle) -> int:
        """
        Add a candle to the end of the sequence.

        Returns:
            The index the candle was stored at (the pre-append length)

        """
        if candle.id in self._index_by_id:
            msg = f"Candle {candle.id} is already cached"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        index = len(self._candles)
        self._candles.append(candle)
        self._index_by_id[candle.id] = index
        return index

    def get(self, index: int) -> Candle:
        return self._candles[index]

    def index_of(self, candle_id: int | str) -> int | None:
        return self._index_by_id.get(candle_id)

    def find(self, candle_id: int | str) -> Candle | None:
        index = self.index_of(candle_id)
        return None if index is None else self._candles[index]

    def update_at(self, index: int, **fields: Any) -> Candle:
        """
        Mutate the candle at index in place.

        Only note, country_code and style may change; style only while unset.

        Raises:
            IndexError: If index is out of range
            ValidationError: If an immutable field is named

        """
        candle = self._candles[index]
        update = InputValidator.validate_mutable_fields(fields)

        if CandleField.STYLE in update:
            style = InputValidator.parse_style(update.pop(CandleField.STYLE))
            if candle.style is not None and style != candle.style:
                msg = f"Style of candle {candle.id} is already set"
                raise ValidationError(msg, ErrorCodes.IMMUTABLE_FIELD)
            candle.style = style

        if CandleField.NOTE in update:
            candle.note = update[CandleField.NOTE] or ""
        if CandleField.COUNTRY_CODE in update:
            candle.country_code = update[CandleField.COUNTRY_CODE] or ""
        return candle

    def update_by_id(self, candle_id: int | str, **fields: Any) -> int | None:
        """
        Mutate a candle located by id at mutation time.

        Returns:
            The index that was updated, or None if the id is not cached

        """
        index = self.index_of(candle_id)
        if index is None:
            logger.warning("Cannot update candle %s: not in cache", candle_id)
            return None
        self.update_at(index, **fields)
        return index
