#!/usr/bin/env python3
"""
Protocol classes for UI component interfaces.

Connectors depend on this protocol instead of the concrete main window, so
they can be tested against lightweight fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QLabel, QPushButton

    from candle_space.core.constants import MarkerStyle
    from candle_space.core.dataclasses_config import AppConfig
    from candle_space.ui.coordinators import SessionCoordinator
    from candle_space.ui.widgets import AnnotationPopover, HoverTooltip, PopoverBackdrop, WorldCanvas


class MainWindowProtocol(Protocol):
    """Widgets and services a connector may touch on the main window."""

    config: AppConfig
    session: SessionCoordinator
    canvas: WorldCanvas
    popover: AnnotationPopover
    backdrop: PopoverBackdrop
    tooltip: HoverTooltip
    count_label: QLabel
    unsaved_label: QLabel
    hint_label: QLabel
    cancel_button: QPushButton
    place_buttons: dict[MarkerStyle | None, QPushButton]

    def update_status_bar(self, message: str, timeout_ms: int = 0) -> None: ...

    def show_error_dialog(self, title: str, message: str) -> None: ...
