#!/usr/bin/env python3
"""
Viewport Coordinator for Candle Space.

Tracks the measured size and scroll offset of the canvas viewport and
centres the world once after the first layout pass.
"""

import logging
from typing import TYPE_CHECKING

from candle_space.core.dataclasses import Rect, ScrollOffset
from candle_space.core.geometry import center_scroll
from candle_space.ui.store import Actions

if TYPE_CHECKING:
    from candle_space.ui.store import CanvasStore

logger = logging.getLogger(__name__)


class ViewportCoordinator:
    """Keeps ViewportState in sync with the scrolling canvas."""

    def __init__(self, store: "CanvasStore") -> None:
        self.store = store

    def center_on_mount(
        self,
        scroll_width: float,
        scroll_height: float,
        client_width: float,
        client_height: float,
    ) -> tuple[float, float] | None:
        """
        Centre the world in the viewport, once.

        Returns:
            The scroll offsets to apply, or None if the viewport is not
            measured yet or was already centred

        """
        if self.store.state.viewport.centered:
            return None
        offsets = center_scroll(scroll_width, scroll_height, client_width, client_height)
        if offsets is None:
            logger.debug("Viewport not measured yet, centring deferred")
            return None
        self.store.dispatch(Actions.viewport_centered(*offsets))
        logger.info("Viewport centred at scroll (%.0f, %.0f)", *offsets)
        return offsets

    def on_resize(self, width: int, height: int, left: float = 0.0, top: float = 0.0) -> None:
        """Record the new viewport size. Does not re-centre."""
        self.store.dispatch(Actions.viewport_resized(width, height, left, top))

    def on_scroll(self, x: float, y: float) -> None:
        self.store.dispatch(Actions.viewport_scrolled(x, y))

    def viewport_rect(self) -> Rect:
        viewport = self.store.state.viewport
        return Rect(left=viewport.left, top=viewport.top, width=viewport.width, height=viewport.height)

    def scroll_offset(self) -> ScrollOffset:
        viewport = self.store.state.viewport
        return ScrollOffset(x=viewport.scroll_x, y=viewport.scroll_y)
