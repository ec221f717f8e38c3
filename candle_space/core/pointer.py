"""Pointer-move event source with explicit subscriptions."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

PointerCallback = Callable[[float, float], None]
UnsubscribeFunction = Callable[[], None]


class PointerBroadcaster:
    """
    Fans out pointer positions (world coordinates) to subscribers.

    The canvas widget publishes; the placement state machine subscribes only
    while armed and unsubscribes on every exit transition.
    """

    def __init__(self) -> None:
        self._subscribers: list[PointerCallback] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: PointerCallback) -> UnsubscribeFunction:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, world_x: float, world_y: float) -> None:
        for callback in self._subscribers[:]:
            try:
                callback(world_x, world_y)
            except Exception:
                logger.exception("Error in pointer subscriber")
