#!/usr/bin/env python3
"""Tooltip showing a candle's note and the date it was lit."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QWidget

from candle_space.core.constants import StyleSheet


class HoverTooltip(QLabel):
    """Fixed-size label; it never takes the pointer so hover tracking continues underneath."""

    def __init__(self, width: int, height: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setStyleSheet(StyleSheet.TOOLTIP)
        self.setFixedSize(width, height)
        self.setWordWrap(True)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.hide()

    def set_content(self, text: str, formatted_date: str) -> None:
        self.setText(f"{text}\n\n{formatted_date}")
