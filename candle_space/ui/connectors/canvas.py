"""
Canvas content connector.

Repaints the world widget when the candle cache or the ghost preview changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from candle_space.ui.protocols import MainWindowProtocol
    from candle_space.ui.store import CanvasState, CanvasStore

logger = logging.getLogger(__name__)


class CanvasContentConnector:
    """Connects the cache revision, ghost and hover target to the world widget."""

    def __init__(self, store: CanvasStore, main_window: MainWindowProtocol) -> None:
        self.store = store
        self.main_window = main_window
        self._unsubscribe = store.subscribe(self._on_state_change)

        # Initial update with current state
        self._update_candles()
        self._update_ghost(store.state)

    def _on_state_change(self, old_state: CanvasState, new_state: CanvasState) -> None:
        if old_state.candles_revision != new_state.candles_revision:
            self._update_candles()

        if (
            old_state.ghost_position != new_state.ghost_position
            or old_state.placement_style != new_state.placement_style
        ):
            self._update_ghost(new_state)

        if old_state.hover != new_state.hover:
            hover = new_state.hover
            self.main_window.canvas.world.set_highlighted(hover.candle_id if hover.visible else None)

    def _update_candles(self) -> None:
        candles = self.main_window.session.cache.candles
        self.main_window.canvas.world.set_candles(candles)
        logger.debug("CANVAS CONNECTOR: Painting %d candles", len(candles))

    def _update_ghost(self, state: CanvasState) -> None:
        self.main_window.canvas.world.set_ghost(state.ghost_position, state.placement_style)

    def disconnect(self) -> None:
        """Cleanup subscription."""
        self._unsubscribe()
