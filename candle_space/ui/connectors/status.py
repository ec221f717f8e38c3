"""
Status connectors.

Keeps the "Total candles" counter and the unsaved indicator in sync with
the store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from candle_space.core.constants import LabelText
from candle_space.ui.store import Selectors

if TYPE_CHECKING:
    from candle_space.ui.protocols import MainWindowProtocol
    from candle_space.ui.store import CanvasState, CanvasStore

logger = logging.getLogger(__name__)


class CandleCountConnector:
    """Connects the candle count to the counter label."""

    def __init__(self, store: CanvasStore, main_window: MainWindowProtocol) -> None:
        self.store = store
        self.main_window = main_window
        self._unsubscribe = store.subscribe(self._on_state_change)

        self.main_window.count_label.setText(LabelText.TOTAL_CANDLES.format(store.state.candle_count))

    def _on_state_change(self, old_state: CanvasState, new_state: CanvasState) -> None:
        if old_state.candle_count != new_state.candle_count:
            self.main_window.count_label.setText(LabelText.TOTAL_CANDLES.format(new_state.candle_count))

    def disconnect(self) -> None:
        """Cleanup subscription."""
        self._unsubscribe()


class UnsavedIndicatorConnector:
    """Shows how many candles have notes that have not reached the store."""

    def __init__(self, store: CanvasStore, main_window: MainWindowProtocol) -> None:
        self.store = store
        self.main_window = main_window
        self._unsubscribe = store.subscribe(self._on_state_change)

        self._update_label(store.state)

    def _on_state_change(self, old_state: CanvasState, new_state: CanvasState) -> None:
        if old_state.unsaved_ids != new_state.unsaved_ids:
            self._update_label(new_state)

    def _update_label(self, state: CanvasState) -> None:
        count = Selectors.unsaved_count(state)
        label = self.main_window.unsaved_label
        label.setText(LabelText.UNSAVED.format(count))
        label.setVisible(count > 0)

    def disconnect(self) -> None:
        """Cleanup subscription."""
        self._unsubscribe()
