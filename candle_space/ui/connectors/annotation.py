"""
Annotation popover connector.

Shows, fills and positions the popover from the annotation record in the
store. The popover is re-anchored when the viewport scrolls or resizes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from candle_space.ui.protocols import MainWindowProtocol
    from candle_space.ui.store import CanvasState, CanvasStore

logger = logging.getLogger(__name__)


class AnnotationPopoverConnector:
    """Connects AnnotationState to the popover and its backdrop."""

    def __init__(self, store: CanvasStore, main_window: MainWindowProtocol) -> None:
        self.store = store
        self.main_window = main_window
        self._unsubscribe = store.subscribe(self._on_state_change)

        self._update_visibility(store.state)

    def _on_state_change(self, old_state: CanvasState, new_state: CanvasState) -> None:
        old, new = old_state.annotation, new_state.annotation

        if old.open != new.open or old.target_id != new.target_id:
            self._update_visibility(new_state)
            return

        if not new.open:
            return

        if old.draft_note != new.draft_note:
            self.main_window.popover.set_note(new.draft_note)
            self.main_window.popover.set_counter(self.main_window.session.annotation.counter_text())
        if old.draft_country != new.draft_country:
            self.main_window.popover.set_country(new.draft_country)
        if old_state.viewport != new_state.viewport:
            self._reposition()

    def _update_visibility(self, state: CanvasState) -> None:
        popover = self.main_window.popover
        backdrop = self.main_window.backdrop

        if not state.annotation.open:
            popover.hide()
            backdrop.hide()
            return

        popover.set_note(state.annotation.draft_note)
        popover.set_country(state.annotation.draft_country)
        popover.set_counter(self.main_window.session.annotation.counter_text())

        backdrop.setGeometry(self.main_window.canvas.viewport().rect())
        backdrop.show()
        backdrop.raise_()
        self._reposition()
        popover.show()
        popover.raise_()
        popover.note_edit.setFocus()
        logger.debug("POPOVER CONNECTOR: Opened for candle %s", state.annotation.target_id)

    def _reposition(self) -> None:
        position = self.main_window.session.annotation.popover_position()
        if position is None:
            return
        self.main_window.popover.move(round(position[0]), round(position[1]))
        self.main_window.backdrop.setGeometry(self.main_window.canvas.viewport().rect())

    def disconnect(self) -> None:
        """Cleanup subscription."""
        self._unsubscribe()
