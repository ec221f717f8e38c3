#!/usr/bin/env python3
"""
GUI tests for the main window: placement, annotation and hover through the widgets.
"""

from __future__ import annotations

import pytest
from PyQt6.QtCore import QEvent, QPoint, QPointF, Qt
from PyQt6.QtGui import QMouseEvent

from candle_space.core.constants import LabelText, LoadStatus, PlacementPhase
from candle_space.core.exceptions import CreateFailedError, ErrorCodes
from candle_space.data.memory_backend import InMemoryCandleBackend


def click_canvas(window, x: int, y: int) -> None:
    """Click the canvas at a viewport-local position."""
    origin = window.canvas.viewport_origin()
    window.canvas.report_geometry()
    window.canvas.canvas_clicked.emit(float(origin.x() + x), float(origin.y() + y), True)


def hover_world(window, x: float, y: float) -> None:
    """Deliver a pointer move over the world widget at a world position."""
    world = window.canvas.world
    local = QPointF(x, y)
    event = QMouseEvent(
        QEvent.Type.MouseMove,
        local,
        QPointF(world.mapToGlobal(local.toPoint())),
        Qt.MouseButton.NoButton,
        Qt.MouseButton.NoButton,
        Qt.KeyboardModifier.NoModifier,
    )
    world.mouseMoveEvent(event)


class BrokenCreateBackend(InMemoryCandleBackend):
    def create(self, drafts):
        raise CreateFailedError("store down", ErrorCodes.STORE_UNREACHABLE)


@pytest.mark.gui
class TestMainWindow:
    """Tests for CandleSpaceMainWindow."""

    def test_initial_state(self, main_window) -> None:
        state = main_window.session.store.state

        assert state.load_status == LoadStatus.LOADED
        assert main_window.count_label.text() == LabelText.TOTAL_CANDLES.format(0)
        assert main_window.hint_label.text() == LabelText.PLACEMENT_HINT
        assert main_window.cancel_button.isHidden()
        assert main_window.unsaved_label.isHidden()

    def test_world_is_centred(self, main_window) -> None:
        state = main_window.session.store.state
        scroll_x, scroll_y = main_window.canvas.scroll_position()

        assert state.viewport.centered
        assert scroll_x > 0
        assert scroll_y > 0
        assert (state.viewport.scroll_x, state.viewport.scroll_y) == (scroll_x, scroll_y)

    def test_place_button_arms(self, qtbot, main_window) -> None:
        button = main_window.place_buttons[None]

        qtbot.mouseClick(button, Qt.MouseButton.LeftButton)

        assert main_window.session.store.state.placement_phase == PlacementPhase.ARMED
        assert button.isChecked()
        assert not main_window.cancel_button.isHidden()
        assert main_window.hint_label.text() == LabelText.ARMED_HINT

        qtbot.mouseClick(main_window.cancel_button, Qt.MouseButton.LeftButton)
        assert main_window.session.store.state.placement_phase == PlacementPhase.IDLE
        assert not button.isChecked()

    def test_place_annotate_and_share(self, qtbot, main_window, memory_backend) -> None:
        session = main_window.session
        scroll_x, scroll_y = main_window.canvas.scroll_position()
        session.placement.arm()

        click_canvas(main_window, 100, 150)
        qtbot.waitUntil(lambda: session.store.state.candle_count == 1)

        candle = session.cache.get(0)
        assert candle.position == (100 + scroll_x, 150 + scroll_y)
        assert main_window.count_label.text() == LabelText.TOTAL_CANDLES.format(1)
        assert main_window.popover.isVisible()
        assert main_window.backdrop.isVisible()

        qtbot.keyClicks(main_window.popover.note_edit, "Hello")
        assert session.store.state.annotation.draft_note == "Hello"
        assert main_window.popover.counter_label.text() == "5/200"

        main_window.popover.set_country("PT")
        assert session.store.state.annotation.draft_country == ""

        main_window.popover.country_combo.setCurrentIndex(main_window.popover.country_combo.findData("JP"))
        assert session.store.state.annotation.draft_country == "JP"

        qtbot.mouseClick(main_window.popover.share_button, Qt.MouseButton.LeftButton)
        assert not main_window.popover.isVisible()
        qtbot.waitUntil(lambda: main_window.task_runner.active_count == 0)
        assert memory_backend.list_candles()[0].note == "Hello"
        assert memory_backend.list_candles()[0].country_code == "JP"

    def test_escape_in_popover_cancels(self, qtbot, main_window, memory_backend) -> None:
        session = main_window.session
        session.placement.arm()
        click_canvas(main_window, 200, 200)
        qtbot.waitUntil(lambda: session.store.state.annotation.open)

        qtbot.keyClicks(main_window.popover.note_edit, "draft")
        qtbot.keyClick(main_window.popover, Qt.Key.Key_Escape)

        assert not session.store.state.annotation.open
        assert memory_backend.list_candles()[0].note == ""

    def test_backdrop_click_cancels(self, qtbot, main_window) -> None:
        session = main_window.session
        session.placement.arm()
        click_canvas(main_window, 200, 200)
        qtbot.waitUntil(lambda: session.store.state.annotation.open)

        qtbot.mouseClick(main_window.backdrop, Qt.MouseButton.LeftButton)

        assert not session.store.state.annotation.open
        assert not main_window.backdrop.isVisible()

    def test_long_note_is_truncated_in_editor(self, qtbot, main_window) -> None:
        session = main_window.session
        session.placement.arm()
        click_canvas(main_window, 200, 200)
        qtbot.waitUntil(lambda: session.store.state.annotation.open)

        main_window.popover.note_edit.setPlainText("z" * 250)

        assert main_window.popover.note_edit.toPlainText() == "z" * 200
        assert main_window.popover.counter_label.text() == "200/200"

    def test_create_failure_shows_alert(self, qtbot, window_factory, mock_message_box) -> None:
        window = window_factory(BrokenCreateBackend())
        window.session.placement.arm()

        click_canvas(window, 100, 100)

        qtbot.waitUntil(lambda: mock_message_box.warning.called)
        assert window.session.store.state.placement_phase == PlacementPhase.IDLE
        assert window.count_label.text() == LabelText.TOTAL_CANDLES.format(0)
        assert not window.popover.isVisible()
        qtbot.waitUntil(lambda: window.session.store.state.last_error is None)

    def test_hover_shows_tooltip(self, qtbot, window_factory, make_candle) -> None:
        backend = InMemoryCandleBackend()
        window = window_factory(backend)
        scroll_x, scroll_y = window.canvas.scroll_position()
        backend_candle = make_candle(1, scroll_x + 300, scroll_y + 300, "Peace")
        window.session.cache.append(backend_candle)

        hover_world(window, scroll_x + 300, scroll_y + 280)

        assert window.tooltip.isVisible()
        assert "Peace" in window.tooltip.text()

        window.canvas.pointer_left.emit()
        assert not window.tooltip.isVisible()

    def test_hover_after_window_move(self, qtbot, window_factory, make_candle) -> None:
        """Pointer moves after the window is dragged resolve against the new viewport origin."""
        window = window_factory(InMemoryCandleBackend())
        scroll_x, scroll_y = window.canvas.scroll_position()
        window.session.cache.append(make_candle(1, scroll_x + 300, scroll_y + 300, "Peace"))
        hover_world(window, scroll_x + 300, scroll_y + 280)
        assert window.tooltip.isVisible()
        window.canvas.pointer_left.emit()

        origin_before = window.canvas.viewport_origin()
        window.move(window.pos() + QPoint(400, 150))
        qtbot.waitUntil(lambda: window.canvas.viewport_origin() != origin_before)

        hover_world(window, scroll_x + 300, scroll_y + 280)

        origin = window.canvas.viewport_origin()
        viewport = window.session.store.state.viewport
        assert (viewport.left, viewport.top) == (origin.x(), origin.y())
        assert window.tooltip.isVisible()
        assert window.session.store.state.hover.candle_id == 1
