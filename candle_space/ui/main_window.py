#!/usr/bin/env python3
"""
Main window class for Candle Space
Composition root of the desktop client: builds the session, the widgets and
the connectors, and routes widget signals to the coordinators.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QKeySequence, QMouseEvent, QShortcut
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton, QVBoxLayout, QWidget

from candle_space.core.constants import ButtonText, CanvasLimits, LabelText, StyleSheet, WindowTitle
from candle_space.core.countries import CountryCatalog
from candle_space.core.dataclasses_config import AppConfig
from candle_space.ui.connectors import connect_all_components
from candle_space.ui.coordinators import SessionCoordinator
from candle_space.ui.store import Selectors
from candle_space.ui.widgets import AnnotationPopover, HoverTooltip, PopoverBackdrop, WorldCanvas
from candle_space.ui.workers import QtTaskRunner

if TYPE_CHECKING:
    from PyQt6.QtGui import QCloseEvent

    from candle_space.core.constants import MarkerStyle
    from candle_space.data.protocol import CandleBackend

logger = logging.getLogger(__name__)


class CandleSpaceMainWindow(QMainWindow):
    """Main application window that coordinates all components."""

    def __init__(
        self,
        config: AppConfig | None = None,
        backend: CandleBackend | None = None,
        catalog: CountryCatalog | None = None,
    ) -> None:
        super().__init__()
        self.config = (config or AppConfig.create_default()).validate()
        self.setWindowTitle(WindowTitle.MAIN_WINDOW)
        self.resize(self.config.window_width, self.config.window_height)

        self.catalog = catalog if catalog is not None else CountryCatalog.from_qlocale()
        self.task_runner = QtTaskRunner(self)
        self.session = SessionCoordinator(self.config, backend=backend, runner=self.task_runner, catalog=self.catalog)

        self._setup_ui()
        self._connect_signals()
        self.connector_manager = connect_all_components(self.session.store, self)

        # Periodic retry of failed annotation writes
        self.retry_timer = QTimer(self)
        self.retry_timer.setInterval(CanvasLimits.RETRY_TIMER_INTERVAL_MS)
        self.retry_timer.timeout.connect(self.session.retry_unsaved)
        self.retry_timer.start()

        self.session.load_candles()
        logger.info("Main window initialized")

    # ==================== UI Setup ====================

    def _setup_ui(self) -> None:
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        # Top bar: place controls, counter, unsaved indicator
        top_bar = QHBoxLayout()
        top_bar.setContentsMargins(12, 8, 12, 8)

        self.place_buttons: dict[MarkerStyle | None, QPushButton] = {}
        if self.config.is_multi_style:
            for style in self.config.styles:
                button = QPushButton(ButtonText.PLACE_STYLE.format(style.get_display_name().lower()))
                button.setCheckable(True)
                self.place_buttons[style] = button
                top_bar.addWidget(button)
        else:
            button = QPushButton(ButtonText.PLACE)
            button.setCheckable(True)
            self.place_buttons[None] = button
            top_bar.addWidget(button)

        self.cancel_button = QPushButton(ButtonText.CANCEL_PLACEMENT)
        self.cancel_button.hide()
        top_bar.addWidget(self.cancel_button)

        self.hint_label = QLabel(LabelText.PLACEMENT_HINT)
        top_bar.addWidget(self.hint_label, stretch=1)

        self.unsaved_label = QLabel()
        self.unsaved_label.hide()
        top_bar.addWidget(self.unsaved_label)

        self.count_label = QLabel()
        self.count_label.setStyleSheet(StyleSheet.COUNT_LABEL)
        top_bar.addWidget(self.count_label)

        layout.addLayout(top_bar)

        # World canvas and transient UI on its viewport
        self.canvas = WorldCanvas(self.config.world_width, self.config.world_height)
        layout.addWidget(self.canvas, stretch=1)

        viewport = self.canvas.viewport()
        self.tooltip = HoverTooltip(self.config.tooltip_width, self.config.tooltip_height, viewport)
        self.backdrop = PopoverBackdrop(viewport)
        self.popover = AnnotationPopover(self.config.popover_width, self.config.popover_height, viewport)
        self.popover.set_countries(self.catalog)

        self.setCentralWidget(central)
        self.status_bar = self.statusBar()

    def _connect_signals(self) -> None:
        """Route widget signals to the coordinators."""
        session = self.session

        for style, button in self.place_buttons.items():
            button.clicked.connect(lambda _checked=False, s=style: self._on_place_clicked(s))
        self.cancel_button.clicked.connect(session.placement.cancel)

        self.canvas.canvas_clicked.connect(session.handle_canvas_click)
        self.canvas.pointer_moved.connect(session.handle_pointer_moved)
        self.canvas.pointer_left.connect(session.hover.on_leave)
        self.canvas.viewport_resized.connect(session.viewport.on_resize)
        self.canvas.scrolled.connect(session.viewport.on_scroll)
        self.canvas.layout_ready.connect(self._on_layout_ready)

        self.popover.note_edited.connect(session.annotation.update_draft_note)
        self.popover.country_selected.connect(session.annotation.update_draft_country)
        self.popover.share_clicked.connect(session.annotation.submit)
        self.popover.cancelled.connect(session.annotation.cancel)
        self.backdrop.clicked.connect(session.annotation.cancel)

        escape = QShortcut(QKeySequence(Qt.Key.Key_Escape), self)
        escape.activated.connect(self._on_escape)

    # ==================== Handlers ====================

    def _on_place_clicked(self, style: MarkerStyle | None) -> None:
        if not self.session.placement.arm(style):
            self.place_buttons[style].setChecked(False)

    def _on_layout_ready(self, scroll_width: int, scroll_height: int, client_width: int, client_height: int) -> None:
        offsets = self.session.viewport.center_on_mount(scroll_width, scroll_height, client_width, client_height)
        if offsets is not None:
            self.canvas.set_scroll_position(*offsets)

    def _on_escape(self) -> None:
        if Selectors.is_annotation_open(self.session.store.state):
            self.session.annotation.cancel()
        else:
            self.session.placement.cancel()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        # Clicks on the window chrome are outside the world canvas
        if event.button() == Qt.MouseButton.LeftButton:
            position = event.globalPosition()
            self.session.handle_canvas_click(position.x(), position.y(), inside_canvas=False)
        super().mousePressEvent(event)

    # ==================== Feedback ====================

    def update_status_bar(self, message: str, timeout_ms: int = 0) -> None:
        self.status_bar.showMessage(message, timeout_ms)

    def show_error_dialog(self, title: str, message: str) -> None:
        """Show a blocking alert once the current dispatch has finished."""
        QTimer.singleShot(0, lambda: self._show_alert(title, message))

    def _show_alert(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)
        self.session.dismiss_error()

    # ==================== Shutdown ====================

    def closeEvent(self, event: QCloseEvent) -> None:  # Qt naming convention
        """Handle window close event with proper cleanup."""
        self.retry_timer.stop()
        self.connector_manager.disconnect_all()
        self.task_runner.wait_for_all()
        self.session.shutdown()
        event.accept()
