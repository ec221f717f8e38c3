"""
Remote candle store protocol for dependency inversion.

The store is a row-oriented service exposing create/read/update over a
"candles" collection. Implementations raise StoreError subclasses; callers
above the data layer receive failures through a result channel instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from candle_space.core.dataclasses import Candle, CandleDraft


@runtime_checkable
class CandleBackend(Protocol):
    """Protocol for the remote candles collection."""

    def create(self, drafts: Sequence[CandleDraft]) -> list[Candle]:
        """
        Insert a batch of candles.

        The whole batch succeeds or fails; there is no partial success.

        Returns:
            Inserted candles with store-assigned id and created_at

        Raises:
            CreateFailedError: If the insert did not happen

        """
        ...

    def update(self, candle_id: int | str, fields: dict[str, Any]) -> None:
        """
        Update note/country_code of an existing candle.

        Raises:
            PersistFailedError: If the update did not reach the store

        """
        ...

    def list_candles(self, since: datetime | None = None) -> list[Candle]:
        """
        Fetch candles ordered by created_at ascending.

        Args:
            since: Optional cutoff; only candles created at or after it are returned

        Raises:
            LoadFailedError: If the fetch failed

        """
        ...
