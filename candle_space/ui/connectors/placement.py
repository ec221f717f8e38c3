"""
Placement controls connector.

Reflects the placement phase on the place buttons, the canvas cursor and
the hint label.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt

from candle_space.core.constants import LabelText, PlacementPhase

if TYPE_CHECKING:
    from candle_space.ui.protocols import MainWindowProtocol
    from candle_space.ui.store import CanvasState, CanvasStore

logger = logging.getLogger(__name__)


class PlacementControlsConnector:
    """Connects the placement state machine to its controls."""

    def __init__(self, store: CanvasStore, main_window: MainWindowProtocol) -> None:
        self.store = store
        self.main_window = main_window
        self._unsubscribe = store.subscribe(self._on_state_change)

        self._update_from_state(store.state)

    def _on_state_change(self, old_state: CanvasState, new_state: CanvasState) -> None:
        if (
            old_state.placement_phase != new_state.placement_phase
            or old_state.placement_style != new_state.placement_style
            or old_state.annotation.open != new_state.annotation.open
        ):
            self._update_from_state(new_state)

    def _update_from_state(self, state: CanvasState) -> None:
        phase = state.placement_phase
        awaiting = phase == PlacementPhase.AWAITING_COMMIT
        armed = phase == PlacementPhase.ARMED

        for style, button in self.main_window.place_buttons.items():
            button.setEnabled(not awaiting and not state.annotation.open)
            button.setChecked(armed and style == state.placement_style)

        self.main_window.cancel_button.setVisible(armed)

        viewport = self.main_window.canvas.viewport()
        if armed:
            viewport.setCursor(Qt.CursorShape.CrossCursor)
        elif awaiting:
            viewport.setCursor(Qt.CursorShape.BusyCursor)
        else:
            viewport.unsetCursor()

        self.main_window.hint_label.setText(LabelText.ARMED_HINT if armed else LabelText.PLACEMENT_HINT)

    def disconnect(self) -> None:
        """Cleanup subscription."""
        self._unsubscribe()
