"""
Hover tooltip connector.

The tooltip position is projected when the hover record changes, not on
every scroll, so a scroll during hover leaves it where it was until the next
enter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from candle_space.ui.store import Selectors

if TYPE_CHECKING:
    from candle_space.ui.protocols import MainWindowProtocol
    from candle_space.ui.store import CanvasState, CanvasStore

logger = logging.getLogger(__name__)


class HoverTooltipConnector:
    """Connects HoverState to the tooltip label."""

    def __init__(self, store: CanvasStore, main_window: MainWindowProtocol) -> None:
        self.store = store
        self.main_window = main_window
        self._unsubscribe = store.subscribe(self._on_state_change)

    def _on_state_change(self, old_state: CanvasState, new_state: CanvasState) -> None:
        if old_state.hover == new_state.hover:
            return

        tooltip = self.main_window.tooltip
        hover = new_state.hover
        if not Selectors.is_tooltip_visible(new_state):
            tooltip.hide()
            return

        tooltip.set_content(hover.text, hover.formatted_date)
        position = self.main_window.session.hover.tooltip_position()
        if position is not None:
            tooltip.move(round(position[0]), round(position[1]))
        tooltip.show()
        tooltip.raise_()

    def disconnect(self) -> None:
        """Cleanup subscription."""
        self._unsubscribe()
