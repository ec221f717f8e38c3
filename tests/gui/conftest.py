#!/usr/bin/env python3
"""
GUI-specific test fixtures.
Provides fixtures for testing PyQt6 widgets and the main window.
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from PyQt6.QtWidgets import QMessageBox

from candle_space.core.countries import CountryCatalog
from candle_space.core.dataclasses_config import AppConfig
from candle_space.ui.main_window import CandleSpaceMainWindow


@pytest.fixture(autouse=True)
def mock_message_box(monkeypatch):
    """Mock QMessageBox to prevent blocking during tests."""
    mock_box = Mock()
    mock_box.warning = Mock(return_value=QMessageBox.StandardButton.Ok)
    monkeypatch.setattr("PyQt6.QtWidgets.QMessageBox.warning", mock_box.warning)
    return mock_box


@pytest.fixture
def catalog() -> CountryCatalog:
    return CountryCatalog({"PT": "Portugal", "JP": "Japan", "AR": "Argentina"})


@pytest.fixture
def window_factory(qtbot, qt_app, catalog):
    """Build a shown main window over the given backend, waiting for the initial load and centring."""

    def build(backend, config: AppConfig | None = None) -> CandleSpaceMainWindow:
        window = CandleSpaceMainWindow(config or AppConfig.create_default(), backend=backend, catalog=catalog)
        qtbot.addWidget(window)
        window.show()
        qtbot.waitExposed(window)
        qtbot.waitUntil(lambda: window.session.store.state.viewport.centered)
        qtbot.waitUntil(lambda: window.task_runner.active_count == 0)
        return window

    return build


@pytest.fixture
def main_window(window_factory, memory_backend) -> CandleSpaceMainWindow:
    return window_factory(memory_backend)
