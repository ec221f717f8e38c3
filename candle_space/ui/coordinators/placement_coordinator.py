#!/usr/bin/env python3
"""
Placement Coordinator for Candle Space.

Drives the arm/place state machine:
    IDLE --arm--> ARMED --click inside world--> AWAITING_COMMIT --create done--> IDLE
    ARMED --click outside / cancel--> IDLE

The ghost preview subscription to pointer moves exists only while ARMED and
is dropped on every exit transition. Create requests go through a TaskRunner;
their completion arrives as a separate event.
"""

import logging
from typing import TYPE_CHECKING

from candle_space.core.constants import MarkerStyle, PlacementPhase
from candle_space.core.dataclasses import CandleDraft
from candle_space.core.exceptions import CreateFailedError, ErrorCodes, ValidationError
from candle_space.core.geometry import is_inside_world, to_world
from candle_space.ui.store import Actions, Selectors

if TYPE_CHECKING:
    from collections.abc import Callable

    from candle_space.core.dataclasses import Candle, Rect, ScrollOffset
    from candle_space.core.dataclasses_config import AppConfig
    from candle_space.core.exceptions import StoreError
    from candle_space.core.pointer import PointerBroadcaster
    from candle_space.data.protocol import CandleBackend
    from candle_space.services.candle_cache import CandleCache
    from candle_space.services.task_runner import TaskRunner
    from candle_space.ui.coordinators.annotation_coordinator import AnnotationCoordinator
    from candle_space.ui.store import CanvasState, CanvasStore

logger = logging.getLogger(__name__)


class PlacementCoordinator:
    """
    Coordinates placing a new candle on the canvas.

    This is a Coordinator (not a Connector) because it dispatches actions and
    issues create requests against the remote store.
    """

    def __init__(
        self,
        store: "CanvasStore",
        cache: "CandleCache",
        backend: "CandleBackend",
        runner: "TaskRunner",
        pointer: "PointerBroadcaster",
        annotation: "AnnotationCoordinator",
        config: "AppConfig",
    ) -> None:
        self.store = store
        self.cache = cache
        self.backend = backend
        self.runner = runner
        self.pointer = pointer
        self.annotation = annotation
        self.config = config
        self._pointer_unsubscribe: Callable[[], None] | None = None

        self._unsubscribe = store.subscribe(self._on_state_change)
        logger.info("PlacementCoordinator initialized")

    @property
    def is_tracking_pointer(self) -> bool:
        return self._pointer_unsubscribe is not None

    def arm(self, style: MarkerStyle | None = None) -> bool:
        """
        Enter ARMED from IDLE (or switch style while ARMED).

        In single-style deployments the candle is created without a style.

        Returns:
            True if placement is armed afterwards

        """
        if Selectors.is_awaiting_commit(self.store.state):
            logger.debug("Ignoring arm while a create request is in flight")
            return False

        if self.config.is_multi_style:
            style = style or self.config.styles[0]
            if style not in self.config.styles:
                logger.warning("Style %s is not enabled, ignoring arm", style)
                return False
        else:
            style = None

        self.store.dispatch(Actions.placement_armed(style=style))
        return Selectors.is_armed(self.store.state)

    def cancel(self) -> None:
        """Leave ARMED without side effects."""
        self.store.dispatch(Actions.placement_cancelled())

    def handle_canvas_click(
        self,
        pointer_x: float,
        pointer_y: float,
        viewport_rect: "Rect",
        scroll: "ScrollOffset",
        inside_canvas: bool = True,
    ) -> bool:
        """
        Handle a click while placement may be armed.

        Returns:
            True if a create request was issued

        """
        phase = self.store.state.placement_phase
        if phase == PlacementPhase.AWAITING_COMMIT:
            logger.debug("Click ignored: create request already in flight")
            return False
        if phase != PlacementPhase.ARMED:
            return False

        if not inside_canvas:
            self.cancel()
            return False

        world_x, world_y = to_world(pointer_x, pointer_y, viewport_rect, scroll)
        if not is_inside_world(world_x, world_y, self.config.world_width, self.config.world_height):
            logger.debug("Click at world (%.1f, %.1f) is outside the world, cancelling", world_x, world_y)
            self.cancel()
            return False

        draft = CandleDraft(x=world_x, y=world_y, style=self.store.state.placement_style)
        self.store.dispatch(Actions.commit_started(world_x, world_y))
        logger.info("Creating candle at world (%.1f, %.1f)", world_x, world_y)

        self.runner.submit(
            lambda: self.backend.create([draft]),
            self._on_create_succeeded,
            self._on_create_failed,
        )
        return True

    def _on_create_succeeded(self, created: "list[Candle]") -> None:
        if not created:
            self._on_create_failed(CreateFailedError("Store returned no rows for create", ErrorCodes.STORE_BAD_RESPONSE))
            return

        candle = created[0]
        try:
            index = self.cache.append(candle)
        except ValidationError as e:
            error = CreateFailedError(f"Store returned an unusable row: {e.message}", ErrorCodes.STORE_BAD_RESPONSE)
            self._on_create_failed(error)
            return
        self.store.dispatch(Actions.commit_succeeded(candle_count=len(self.cache)))
        logger.info("Candle %s created at index %d", candle.id, index)

        self.annotation.open(index, candle.id, candle.x, candle.y)

    def _on_create_failed(self, error: "StoreError") -> None:
        logger.warning("CreateFailed: %s", error)
        self.store.dispatch(Actions.commit_failed(error.message, error.error_code))

    def _on_pointer_moved(self, world_x: float, world_y: float) -> None:
        self.store.dispatch_safe(Actions.ghost_moved(world_x, world_y))

    def _on_state_change(self, old_state: "CanvasState", new_state: "CanvasState") -> None:
        """Own the pointer subscription exactly while ARMED."""
        was_armed = Selectors.is_armed(old_state)
        is_armed = Selectors.is_armed(new_state)
        if is_armed and not was_armed:
            self._start_tracking()
        elif was_armed and not is_armed:
            self._stop_tracking()

    def _start_tracking(self) -> None:
        if self._pointer_unsubscribe is None:
            self._pointer_unsubscribe = self.pointer.subscribe(self._on_pointer_moved)

    def _stop_tracking(self) -> None:
        if self._pointer_unsubscribe is not None:
            self._pointer_unsubscribe()
            self._pointer_unsubscribe = None

    def disconnect(self) -> None:
        """Cleanup subscriptions."""
        self._stop_tracking()
        self._unsubscribe()
