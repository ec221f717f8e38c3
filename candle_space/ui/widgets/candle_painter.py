#!/usr/bin/env python3
"""
Candle Painter for the world canvas.

Draws a candle with its bottom-centre on its world position. The same
routine draws the translucent ghost preview while placement is armed.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QPainter, QPen

from candle_space.core.constants import ColorPalette, MarkerStyle
from candle_space.core.geometry import candle_bounds

logger = logging.getLogger(__name__)

# Fraction of the footprint height taken by the flame
_FLAME_RATIO = 0.3


class CandlePainter:
    """Stateless drawing helper for candles and the ghost preview."""

    def __init__(self) -> None:
        self._wax = QColor(ColorPalette.WAX)
        self._outline = QColor(ColorPalette.WAX_OUTLINE)
        self._flame = QColor(ColorPalette.FLAME)
        self._flame_core = QColor(ColorPalette.FLAME_CORE)

    def paint_candle(
        self,
        painter: QPainter,
        x: float,
        y: float,
        style: MarkerStyle | None = None,
        ghost: bool = False,
        highlighted: bool = False,
    ) -> None:
        """Paint one candle anchored at world (x, y)."""
        bounds = candle_bounds(x, y, style)
        alpha = ColorPalette.GHOST_ALPHA if ghost else 255

        flame_height = bounds.height * _FLAME_RATIO
        body = QRectF(bounds.left, bounds.top + flame_height, bounds.width, bounds.height - flame_height)
        flame_width = min(bounds.width * 0.5, 14.0)
        flame_center = QPointF(bounds.left + bounds.width / 2, bounds.top + flame_height / 2 + 1)

        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)

        wax = QColor(self._wax)
        wax.setAlpha(alpha)
        outline = QColor(ColorPalette.ACCENT if highlighted else self._outline)
        outline.setAlpha(alpha)
        painter.setPen(QPen(outline, 2 if highlighted else 1))
        painter.setBrush(wax)
        painter.drawRoundedRect(body, 3, 3)

        flame = QColor(self._flame)
        flame.setAlpha(alpha)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(flame)
        painter.drawEllipse(flame_center, flame_width / 2, flame_height / 2)

        core = QColor(self._flame_core)
        core.setAlpha(alpha)
        painter.setBrush(core)
        painter.drawEllipse(flame_center + QPointF(0, flame_height / 6), flame_width / 5, flame_height / 5)

        painter.restore()
