#!/usr/bin/env python3
"""
World Canvas Widget for Candle Space.

A QScrollArea over a fixed-size world widget. The world widget paints the
candles and the ghost preview; the scroll area reports clicks, pointer moves,
resizes and scrolls in screen coordinates so the session can convert them to
world coordinates with the viewport rectangle active at that instant.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import QPoint, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QColor, QMouseEvent, QPainter, QPaintEvent
from PyQt6.QtWidgets import QFrame, QScrollArea, QWidget

from candle_space.core.constants import ColorPalette
from candle_space.ui.widgets.candle_painter import CandlePainter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from PyQt6.QtGui import QResizeEvent, QShowEvent

    from candle_space.core.constants import MarkerStyle
    from candle_space.core.dataclasses import Candle

logger = logging.getLogger(__name__)


class WorldWidget(QWidget):
    """The full world, world_width x world_height pixels, in world coordinates."""

    pressed = pyqtSignal(QPoint)  # Global position
    moved = pyqtSignal(QPoint)  # Global position
    left = pyqtSignal()

    def __init__(self, world_width: int, world_height: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFixedSize(world_width, world_height)
        self.setMouseTracking(True)
        self.setAutoFillBackground(False)

        self._painter = CandlePainter()
        self._candles: tuple[Candle, ...] = ()
        self._ghost: tuple[float, float] | None = None
        self._ghost_style: MarkerStyle | None = None
        self._highlighted_id: int | str | None = None

    @property
    def candles(self) -> tuple[Candle, ...]:
        return self._candles

    @property
    def ghost(self) -> tuple[float, float] | None:
        return self._ghost

    def set_candles(self, candles: Sequence[Candle]) -> None:
        self._candles = tuple(candles)
        self.update()

    def set_ghost(self, position: tuple[float, float] | None, style: MarkerStyle | None = None) -> None:
        if position == self._ghost and style == self._ghost_style:
            return
        self._ghost = position
        self._ghost_style = style
        self.update()

    def set_highlighted(self, candle_id: int | str | None) -> None:
        if candle_id != self._highlighted_id:
            self._highlighted_id = candle_id
            self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.fillRect(event.rect(), QColor(ColorPalette.BACKGROUND))
            for candle in self._candles:
                self._painter.paint_candle(
                    painter,
                    candle.x,
                    candle.y,
                    candle.style,
                    highlighted=candle.id == self._highlighted_id,
                )
            if self._ghost is not None:
                self._painter.paint_candle(painter, self._ghost[0], self._ghost[1], self._ghost_style, ghost=True)
        finally:
            painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.pressed.emit(event.globalPosition().toPoint())
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self.moved.emit(event.globalPosition().toPoint())
        super().mouseMoveEvent(event)

    def leaveEvent(self, event) -> None:
        self.left.emit()
        super().leaveEvent(event)


class WorldCanvas(QScrollArea):
    """
    Scrollable viewport onto the world.

    Signals carry screen (global) coordinates. The viewport rectangle is
    the viewport's global geometry, so to_world() gives world coordinates.
    """

    canvas_clicked = pyqtSignal(float, float, bool)  # x, y, inside_canvas
    pointer_moved = pyqtSignal(float, float)
    pointer_left = pyqtSignal()
    viewport_resized = pyqtSignal(int, int, float, float)  # width, height, left, top
    scrolled = pyqtSignal(int, int)
    layout_ready = pyqtSignal(int, int, int, int)  # scroll w/h, client w/h

    def __init__(self, world_width: int, world_height: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setWidgetResizable(False)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)

        self.world = WorldWidget(world_width, world_height)
        self.setWidget(self.world)
        self._layout_reported = False
        self._reported_origin: QPoint | None = None

        self.world.pressed.connect(self._on_world_pressed)
        self.world.moved.connect(self._on_world_moved)
        self.world.left.connect(self.pointer_left)
        self.horizontalScrollBar().valueChanged.connect(self._on_scroll_changed)
        self.verticalScrollBar().valueChanged.connect(self._on_scroll_changed)

    # ==================== Geometry ====================

    def viewport_origin(self) -> QPoint:
        """Global position of the viewport's top-left corner."""
        return self.viewport().mapToGlobal(QPoint(0, 0))

    def scroll_position(self) -> tuple[int, int]:
        return (self.horizontalScrollBar().value(), self.verticalScrollBar().value())

    def set_scroll_position(self, x: float, y: float) -> None:
        self.horizontalScrollBar().setValue(round(x))
        self.verticalScrollBar().setValue(round(y))

    def report_geometry(self) -> None:
        """Emit the current viewport size and origin."""
        origin = self.viewport_origin()
        viewport = self.viewport()
        self._reported_origin = origin
        self.viewport_resized.emit(viewport.width(), viewport.height(), float(origin.x()), float(origin.y()))

    # ==================== Events ====================

    def showEvent(self, event: QShowEvent) -> None:
        super().showEvent(event)
        if not self._layout_reported:
            # Deferred until after the first layout pass
            QTimer.singleShot(0, self._report_layout)

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.report_geometry()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        # Only reached for clicks on the viewport area not covered by the world
        if event.button() == Qt.MouseButton.LeftButton:
            position = event.globalPosition()
            self.report_geometry()
            self.canvas_clicked.emit(position.x(), position.y(), False)
        super().mousePressEvent(event)

    def _report_layout(self) -> None:
        viewport = self.viewport()
        if viewport.width() <= 0 or viewport.height() <= 0:
            logger.debug("Canvas not measured yet")
            return
        self._layout_reported = True
        self.report_geometry()
        self.layout_ready.emit(self.world.width(), self.world.height(), viewport.width(), viewport.height())

    def _on_world_pressed(self, global_pos: QPoint) -> None:
        self.report_geometry()
        self.canvas_clicked.emit(float(global_pos.x()), float(global_pos.y()), True)

    def _on_world_moved(self, global_pos: QPoint) -> None:
        # The window may have moved since the last report
        if self.viewport_origin() != self._reported_origin:
            self.report_geometry()
        self.pointer_moved.emit(float(global_pos.x()), float(global_pos.y()))

    def _on_scroll_changed(self, _value: int) -> None:
        self.scrolled.emit(*self.scroll_position())
