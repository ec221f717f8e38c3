#!/usr/bin/env python3
"""
Annotation popover for writing a letter on a freshly lit candle.

The popover is a passive view: it reports edits through signals and is
updated from the store by AnnotationPopoverConnector.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QKeyEvent, QMouseEvent, QTextCursor
from PyQt6.QtWidgets import QComboBox, QFrame, QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QVBoxLayout, QWidget

from candle_space.core.constants import ButtonText, LabelText, StyleSheet
from candle_space.ui.utils.qt_context_managers import blocked_signals

if TYPE_CHECKING:
    from candle_space.core.countries import CountryCatalog

logger = logging.getLogger(__name__)


class PopoverBackdrop(QWidget):
    """Translucent layer behind the popover; a click on it dismisses the popover."""

    clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(StyleSheet.BACKDROP)
        self.hide()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self.clicked.emit()
        event.accept()


class AnnotationPopover(QFrame):
    """Country selector, note editor with live counter, and Share button."""

    note_edited = pyqtSignal(str)
    country_selected = pyqtSignal(str)
    share_clicked = pyqtSignal()
    cancelled = pyqtSignal()

    def __init__(self, width: int, height: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("annotationPopover")
        self.setStyleSheet(StyleSheet.POPOVER)
        self.setFixedSize(width, height)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 16, 20, 16)

        self.heading_label = QLabel(LabelText.ANNOTATION_HEADING)
        self.heading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.heading_label)

        self.country_combo = QComboBox()
        self.country_combo.addItem(LabelText.COUNTRY_PLACEHOLDER, "")
        layout.addWidget(self.country_combo)

        self.note_edit = QPlainTextEdit()
        self.note_edit.setPlaceholderText(LabelText.NOTE_PLACEHOLDER)
        layout.addWidget(self.note_edit, stretch=1)

        footer = QHBoxLayout()
        self.counter_label = QLabel()
        footer.addWidget(self.counter_label)
        footer.addStretch()
        self.share_button = QPushButton(ButtonText.SHARE)
        self.share_button.setStyleSheet(StyleSheet.SHARE_BUTTON)
        footer.addWidget(self.share_button)
        layout.addLayout(footer)

        self.note_edit.textChanged.connect(self._on_note_changed)
        self.country_combo.currentIndexChanged.connect(self._on_country_changed)
        self.share_button.clicked.connect(self._on_share_clicked)
        self.hide()

    def set_countries(self, catalog: CountryCatalog) -> None:
        """Fill the country selector, keeping the placeholder entry first."""
        with blocked_signals(self.country_combo):
            self.country_combo.clear()
            self.country_combo.addItem(LabelText.COUNTRY_PLACEHOLDER, "")
            for code, name in catalog:
                self.country_combo.addItem(name, code)
        logger.debug("Country selector filled with %d entries", len(catalog))

    def set_note(self, text: str) -> None:
        """Show the stored draft without echoing it as an edit."""
        if self.note_edit.toPlainText() == text:
            return
        with blocked_signals(self.note_edit):
            self.note_edit.setPlainText(text)
            self.note_edit.moveCursor(QTextCursor.MoveOperation.End)

    def set_country(self, code: str) -> None:
        index = self.country_combo.findData(code)
        with blocked_signals(self.country_combo):
            self.country_combo.setCurrentIndex(max(index, 0))

    def set_counter(self, text: str) -> None:
        self.counter_label.setText(text)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Escape:
            self.cancelled.emit()
            event.accept()
            return
        super().keyPressEvent(event)

    def _on_share_clicked(self) -> None:
        self.share_clicked.emit()

    def _on_note_changed(self) -> None:
        self.note_edited.emit(self.note_edit.toPlainText())

    def _on_country_changed(self, index: int) -> None:
        self.country_selected.emit(self.country_combo.itemData(index) or "")
