"""
Tests for store connectors driven against a mocked main window.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

from candle_space.core.constants import ErrorMessage, LabelText, StatusTimeout
from candle_space.ui.connectors import ErrorNotificationConnector, UnsavedIndicatorConnector
from candle_space.ui.store import Actions, CanvasStore


def make_window() -> MagicMock:
    window = MagicMock()
    window.session.reconciler.get_pending.side_effect = lambda candle_id: SimpleNamespace(
        last_error=f"write {candle_id} failed"
    )
    return window


class TestErrorNotificationConnector:
    """Tests for persist failure reporting."""

    def test_reports_the_newly_unsaved_candle(self) -> None:
        """The message names the candle that just failed, not the last one in the tuple."""
        store = CanvasStore()
        window = make_window()
        ErrorNotificationConnector(store, window)
        store.dispatch(Actions.unsaved_changed((5,)))
        window.update_status_bar.reset_mock()

        store.dispatch(Actions.unsaved_changed((3, 5)))

        window.session.reconciler.get_pending.assert_called_with(3)
        window.update_status_bar.assert_called_once_with(
            ErrorMessage.PERSIST_FAILED.format("write 3 failed"), StatusTimeout.LONG
        )

    def test_shrinking_unsaved_set_is_silent(self) -> None:
        store = CanvasStore()
        window = make_window()
        ErrorNotificationConnector(store, window)
        store.dispatch(Actions.unsaved_changed((3, 5)))
        window.update_status_bar.reset_mock()

        store.dispatch(Actions.unsaved_changed((5,)))

        window.update_status_bar.assert_not_called()

    def test_disconnect_stops_updates(self) -> None:
        store = CanvasStore()
        window = make_window()
        connector = ErrorNotificationConnector(store, window)

        connector.disconnect()
        store.dispatch(Actions.unsaved_changed((1,)))

        window.update_status_bar.assert_not_called()


class TestUnsavedIndicatorConnector:
    def test_label_tracks_unsaved_count(self) -> None:
        store = CanvasStore()
        window = MagicMock()
        UnsavedIndicatorConnector(store, window)

        store.dispatch(Actions.unsaved_changed((1, 2)))

        window.unsaved_label.setText.assert_called_with(LabelText.UNSAVED.format(2))
        window.unsaved_label.setVisible.assert_called_with(True)
