"""
Error notification connector.

Surfaces CreateFailed, LoadFailed and PersistFailed conditions recorded in
the store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from candle_space.core.constants import ErrorMessage, LoadStatus, StatusTimeout, WindowTitle
from candle_space.ui.store import Selectors

if TYPE_CHECKING:
    from candle_space.ui.protocols import MainWindowProtocol
    from candle_space.ui.store import CanvasState, CanvasStore

logger = logging.getLogger(__name__)


class ErrorNotificationConnector:
    """
    Connects error state to user feedback.

    A failed placement shows a blocking alert when alert_on_create_failure
    is set, a status bar message otherwise. Load and persist failures go to
    the status bar.
    """

    def __init__(self, store: CanvasStore, main_window: MainWindowProtocol) -> None:
        self.store = store
        self.main_window = main_window
        self._unsubscribe = store.subscribe(self._on_state_change)

    def _on_state_change(self, old_state: CanvasState, new_state: CanvasState) -> None:
        create_failed = (
            Selectors.is_awaiting_commit(old_state)
            and Selectors.is_idle(new_state)
            and Selectors.has_error(new_state)
            and new_state.candle_count == old_state.candle_count
        )
        if create_failed:
            self._show_create_failed(new_state.last_error)

        if old_state.load_status != new_state.load_status and new_state.load_status == LoadStatus.FAILED:
            message = ErrorMessage.LOAD_FAILED.format(new_state.last_error)
            logger.warning("ERROR CONNECTOR: %s", message)
            self.main_window.update_status_bar(message, StatusTimeout.LONG)

        newly_unsaved = [candle_id for candle_id in new_state.unsaved_ids if candle_id not in old_state.unsaved_ids]
        if newly_unsaved:
            pending = self.main_window.session.reconciler.get_pending(newly_unsaved[-1])
            reason = pending.last_error if pending else ""
            self.main_window.update_status_bar(ErrorMessage.PERSIST_FAILED.format(reason), StatusTimeout.LONG)

    def _show_create_failed(self, error: str) -> None:
        message = ErrorMessage.CREATE_FAILED.format(error)
        logger.warning("ERROR CONNECTOR: %s", message)
        if self.main_window.config.alert_on_create_failure:
            self.main_window.show_error_dialog(WindowTitle.CREATE_FAILED, message)
        else:
            self.main_window.update_status_bar(message, StatusTimeout.LONG)

    def disconnect(self) -> None:
        """Cleanup subscription."""
        self._unsubscribe()
