"""
Persist reconciliation for optimistic annotation updates.

Local mutations are applied immediately by the caller. The remote write is
queued here; a failed write stays queued, its candle is reported as unsaved,
and it is retried with exponential backoff. The local value is never rolled
back. Writes to the same candle merge, last writer wins.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any

from candle_space.core.constants import CanvasLimits

if TYPE_CHECKING:
    from candle_space.core.exceptions import StoreError
    from candle_space.data.protocol import CandleBackend
    from candle_space.services.task_runner import TaskRunner

logger = logging.getLogger(__name__)

UnsavedCallback = Callable[[tuple[Any, ...]], None]


@dataclass
class PendingWrite:
    """A queued remote update for one candle."""

    candle_id: int | str
    fields: dict[str, Any] = field(default_factory=dict)
    version: int = 1
    attempts: int = 0
    next_attempt_at: float = 0.0
    in_flight: bool = False
    last_error: str | None = None

    @property
    def has_failed(self) -> bool:
        return self.last_error is not None


class PersistReconciler:
    """Queues remote updates and retries failed ones with backoff."""

    def __init__(
        self,
        backend: CandleBackend,
        runner: TaskRunner,
        *,
        base_delay: float = CanvasLimits.RETRY_BASE_DELAY_SECONDS,
        max_delay: float = CanvasLimits.RETRY_MAX_DELAY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        on_unsaved_changed: UnsavedCallback | None = None,
    ) -> None:
        self._backend = backend
        self._runner = runner
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._clock = clock
        self._on_unsaved_changed = on_unsaved_changed
        self._pending: dict[int | str, PendingWrite] = {}

    @property
    def unsaved_ids(self) -> tuple[Any, ...]:
        """Candles whose latest write has failed at least once and is still queued."""
        return tuple(p.candle_id for p in self._pending.values() if p.has_failed)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def get_pending(self, candle_id: int | str) -> PendingWrite | None:
        return self._pending.get(candle_id)

    def backoff_delay(self, attempts: int) -> float:
        """Delay before the next attempt after `attempts` failed attempts."""
        return min(self._base_delay * 2 ** max(attempts - 1, 0), self._max_delay)

    def persist(self, candle_id: int | str, fields: dict[str, Any]) -> None:
        """Queue a remote write for a candle and send it now if nothing is in flight."""
        pending = self._pending.get(candle_id)
        if pending is None:
            pending = PendingWrite(candle_id=candle_id, fields=dict(fields))
            self._pending[candle_id] = pending
        else:
            pending.fields.update(fields)
            pending.version += 1
            pending.next_attempt_at = 0.0

        if pending.in_flight:
            logger.debug("Write for candle %s in flight, queued version %d", candle_id, pending.version)
            return
        self._send(pending)

    def retry_due(self) -> int:
        """
        Resend queued writes whose backoff has elapsed.

        Returns:
            Number of writes resent

        """
        now = self._clock()
        due = [p for p in self._pending.values() if not p.in_flight and p.next_attempt_at <= now]
        for pending in due:
            logger.info("Retrying write for candle %s (attempt %d)", pending.candle_id, pending.attempts + 1)
            self._send(pending)
        return len(due)

    def _send(self, pending: PendingWrite) -> None:
        pending.in_flight = True
        pending.attempts += 1
        candle_id = pending.candle_id
        snapshot = dict(pending.fields)
        self._runner.submit(
            lambda: self._backend.update(candle_id, snapshot),
            partial(self._on_success, candle_id, pending.version),
            partial(self._on_failure, candle_id, pending.version),
        )

    def _on_success(self, candle_id: int | str, version: int, _result: Any) -> None:
        pending = self._pending.get(candle_id)
        if pending is None:
            return
        pending.in_flight = False

        if pending.version != version:
            # A newer edit arrived while this one was in flight
            pending.attempts = 0
            self._send(pending)
            return

        was_unsaved = pending.has_failed
        del self._pending[candle_id]
        logger.debug("Persisted candle %s", candle_id)
        if was_unsaved:
            self._notify()

    def _on_failure(self, candle_id: int | str, version: int, error: StoreError) -> None:
        pending = self._pending.get(candle_id)
        if pending is None:
            return
        pending.in_flight = False
        pending.last_error = error.message
        delay = self.backoff_delay(pending.attempts)
        pending.next_attempt_at = self._clock() + delay
        logger.warning(
            "PersistFailed for candle %s (version %d, attempt %d): %s; retrying in %.1fs",
            candle_id,
            version,
            pending.attempts,
            error,
            delay,
        )
        self._notify()

    def _notify(self) -> None:
        if self._on_unsaved_changed is not None:
            self._on_unsaved_changed(self.unsaved_ids)
