#!/usr/bin/env python3
"""
Session Coordinator for Candle Space.

The single controller of a canvas session. It owns the state store, the
candle cache and the persist reconciler, and wires the placement,
annotation, hover and viewport coordinators together. Front ends talk to
this object and subscribe to its store.
"""

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from candle_space.core.dataclasses_config import AppConfig
from candle_space.core.geometry import hit_test, to_world
from candle_space.core.pointer import PointerBroadcaster
from candle_space.data.factory import create_backend
from candle_space.services.candle_cache import CandleCache
from candle_space.services.reconciliation import PersistReconciler
from candle_space.services.task_runner import ImmediateTaskRunner
from candle_space.ui.coordinators.annotation_coordinator import AnnotationCoordinator
from candle_space.ui.coordinators.hover_coordinator import HoverCoordinator
from candle_space.ui.coordinators.placement_coordinator import PlacementCoordinator
from candle_space.ui.coordinators.viewport_coordinator import ViewportCoordinator
from candle_space.ui.store import Actions, CanvasStore, Selectors

if TYPE_CHECKING:
    from candle_space.core.countries import CountryCatalog
    from candle_space.core.dataclasses import Candle
    from candle_space.core.exceptions import StoreError
    from candle_space.data.protocol import CandleBackend
    from candle_space.services.task_runner import TaskRunner

logger = logging.getLogger(__name__)


class SessionCoordinator:
    """
    Builds and owns everything a canvas session needs.

    Example:
        session = SessionCoordinator(AppConfig.create_default())
        session.load_candles()
        session.placement.arm()
        session.handle_canvas_click(120, 340)

    """

    def __init__(
        self,
        config: AppConfig | None = None,
        backend: "CandleBackend | None" = None,
        runner: "TaskRunner | None" = None,
        catalog: "CountryCatalog | None" = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = (config or AppConfig.create_default()).validate()
        self.backend = backend if backend is not None else create_backend(self.config)
        self.runner = runner if runner is not None else ImmediateTaskRunner()

        self.store = CanvasStore()
        self.store.initialize_from_config(self.config)
        self.cache = CandleCache()
        self.pointer = PointerBroadcaster()
        self.reconciler = PersistReconciler(
            self.backend,
            self.runner,
            base_delay=self.config.retry_base_delay_seconds,
            max_delay=self.config.retry_max_delay_seconds,
            clock=clock,
            on_unsaved_changed=self._on_unsaved_changed,
        )

        self.viewport = ViewportCoordinator(self.store)
        self.annotation = AnnotationCoordinator(self.store, self.cache, self.reconciler, self.config, catalog)
        self.hover = HoverCoordinator(self.store, self.cache, self.config)
        self.placement = PlacementCoordinator(
            self.store,
            self.cache,
            self.backend,
            self.runner,
            self.pointer,
            self.annotation,
            self.config,
        )
        self._pointer_unsubscribe = self.pointer.subscribe(self.hover.on_pointer_moved)
        logger.info("SessionCoordinator initialized (backend=%s)", self.config.backend)

    # ==================== Loading ====================

    def load_candles(self) -> None:
        """
        Fetch every candle (within the freshness window) and replace the cache.

        A failure leaves the cache untouched and is recorded in state.
        """
        since = self.config.freshness_cutoff()
        self.store.dispatch(Actions.candles_load_started())
        self.runner.submit(
            lambda: self.backend.list_candles(since=since),
            self._on_candles_loaded,
            self._on_load_failed,
        )

    def _on_candles_loaded(self, candles: "list[Candle]") -> None:
        self.cache.replace_all(candles)
        self.store.dispatch(Actions.candles_loaded(candle_count=len(self.cache)))

    def _on_load_failed(self, error: "StoreError") -> None:
        logger.warning("LoadFailed: %s", error)
        self.store.dispatch(Actions.candles_load_failed(error.message, error.error_code))

    # ==================== Pointer input ====================

    def handle_canvas_click(self, pointer_x: float, pointer_y: float, inside_canvas: bool = True) -> bool:
        """
        Route a click on the canvas.

        While placing, the click goes to the placement state machine. In IDLE
        it may reopen the annotation of the candle under the pointer.

        Returns:
            True if the click was consumed

        """
        rect = self.viewport.viewport_rect()
        scroll = self.viewport.scroll_offset()
        if not Selectors.is_idle(self.store.state):
            return self.placement.handle_canvas_click(pointer_x, pointer_y, rect, scroll, inside_canvas)

        if not inside_canvas or Selectors.is_annotation_open(self.store.state):
            return False
        world_x, world_y = to_world(pointer_x, pointer_y, rect, scroll)
        candle = hit_test(self.cache, world_x, world_y)
        if candle is None:
            return False
        return self.annotation.open_for_candle(candle.id)

    def handle_pointer_moved(self, pointer_x: float, pointer_y: float) -> None:
        """Publish a pointer position, converted to world coordinates."""
        world_x, world_y = to_world(pointer_x, pointer_y, self.viewport.viewport_rect(), self.viewport.scroll_offset())
        self.pointer.publish(world_x, world_y)

    # ==================== Persistence ====================

    def retry_unsaved(self) -> int:
        """Resend queued writes whose backoff has elapsed."""
        return self.reconciler.retry_due()

    def dismiss_error(self) -> None:
        """Clear the last reported error once the user has seen it."""
        if Selectors.has_error(self.store.state):
            self.store.dispatch(Actions.error_dismissed())

    def _on_unsaved_changed(self, candle_ids: tuple[Any, ...]) -> None:
        if candle_ids:
            logger.warning("%d candle(s) have unsaved notes", len(candle_ids))
        self.store.dispatch_safe(Actions.unsaved_changed(candle_ids))

    # ==================== Lifecycle ====================

    def shutdown(self) -> None:
        """Drop subscriptions and release the backend."""
        self._pointer_unsubscribe()
        self.placement.disconnect()
        close = getattr(self.backend, "close", None)
        if callable(close):
            close()
        logger.info("SessionCoordinator shut down")
