"""
Task runners and the result channel for remote store calls.

Store calls complete as independent events: a runner invokes exactly one of
on_success / on_failure per submitted call. Failures never unwind into the
caller of submit().
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from candle_space.core.exceptions import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[StoreError], None]


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of a store call: either a value or a StoreError."""

    ok: bool
    value: T | None = None
    error: StoreError | None = None

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error else None

    @property
    def error_code(self) -> str | None:
        return self.error.error_code if self.error else None

    @classmethod
    def success(cls, value: T) -> StoreResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: StoreError) -> StoreResult[T]:
        return cls(ok=False, error=error)


def run_store_call(call: Callable[[], T]) -> StoreResult[T]:
    """Run a store call synchronously and capture its outcome."""
    try:
        return StoreResult.success(call())
    except StoreError as e:
        logger.warning("Store call failed: %s", e)
        return StoreResult.failure(e)


class TaskRunner(Protocol):
    """Executes store calls and reports completion as a separate event."""

    def submit(self, call: Callable[[], Any], on_success: SuccessCallback, on_failure: FailureCallback) -> None: ...


class ImmediateTaskRunner:
    """
    Runs store calls inline on the calling thread.

    Used for headless sessions and tests; completions still arrive through
    the callbacks, never as exceptions.
    """

    def submit(self, call: Callable[[], Any], on_success: SuccessCallback, on_failure: FailureCallback) -> None:
        result = run_store_call(call)
        if result.ok:
            on_success(result.value)
        else:
            on_failure(result.error)
