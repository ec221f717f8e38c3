#!/usr/bin/env python3
"""
Hover Coordinator for Candle Space.

Shows a candle's note and date in a tooltip while the pointer is over it.
The tooltip position is projected from world coordinates at render time.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from candle_space.core.constants import AnchorMode
from candle_space.core.dataclasses import Rect, ScrollOffset
from candle_space.core.geometry import anchor_rect, clamp_rect, hit_test, to_screen
from candle_space.ui.store import Actions

if TYPE_CHECKING:
    from candle_space.core.dataclasses import Candle
    from candle_space.core.dataclasses_config import AppConfig
    from candle_space.services.candle_cache import CandleCache
    from candle_space.ui.store import CanvasStore

logger = logging.getLogger(__name__)


def format_created_at(created_at: datetime) -> str:
    """Render a timestamp as a locale date and time in local time."""
    return created_at.astimezone().strftime("%x %X")


class HoverCoordinator:
    """Coordinates hover enter/leave for candles under the pointer."""

    def __init__(self, store: "CanvasStore", cache: "CandleCache", config: "AppConfig") -> None:
        self.store = store
        self.cache = cache
        self.config = config

    def on_enter(self, candle: "Candle") -> bool:
        """
        Show the tooltip for a candle that carries a note.

        Entering a candle without a note does nothing.
        """
        if not candle.note:
            return False
        self.store.dispatch(
            Actions.hover_entered(
                candle_id=candle.id,
                world_x=candle.x,
                world_y=candle.y,
                text=candle.note,
                formatted_date=format_created_at(candle.created_at),
            )
        )
        return True

    def on_leave(self) -> None:
        """Hide the tooltip, keeping its last content."""
        if self.store.state.hover.visible:
            self.store.dispatch(Actions.hover_left())

    def on_pointer_moved(self, world_x: float, world_y: float) -> None:
        """Derive enter/leave from the candle under the pointer."""
        candle = hit_test(self.cache, world_x, world_y)
        if candle is None or not candle.note:
            self.on_leave()
            return
        hover = self.store.state.hover
        if hover.visible and hover.candle_id == candle.id:
            return
        self.on_enter(candle)

    def tooltip_position(self) -> tuple[float, float] | None:
        """Top-left of the tooltip in viewport coordinates, or None when hidden."""
        state = self.store.state
        if not state.hover.visible:
            return None

        viewport = state.viewport
        screen_x, screen_y = to_screen(
            state.hover.world_x,
            state.hover.world_y,
            Rect(width=viewport.width, height=viewport.height),
            ScrollOffset(x=viewport.scroll_x, y=viewport.scroll_y),
        )
        left, top = anchor_rect(
            screen_x,
            screen_y,
            self.config.tooltip_width,
            self.config.tooltip_height,
            mode=AnchorMode.OFFSET,
            offset_x=self.config.tooltip_offset_x,
            offset_y=self.config.tooltip_offset_y,
        )
        return clamp_rect(
            left,
            top,
            self.config.tooltip_width,
            self.config.tooltip_height,
            viewport.width,
            viewport.height,
            self.config.tooltip_margin,
        )
