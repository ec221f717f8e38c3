#!/usr/bin/env python3
"""
Shared test fixtures for Candle Space.
Provides common test setup and utilities.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from candle_space.core.dataclasses import Candle
from candle_space.core.dataclasses_config import AppConfig
from candle_space.data.memory_backend import InMemoryCandleBackend
from candle_space.services.task_runner import ImmediateTaskRunner
from candle_space.ui.coordinators import SessionCoordinator

BASE_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def qt_app():
    """Provide QApplication for GUI tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


# pytest-qt configuration
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "gui: mark test as a GUI test")
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


class SteppingClock:
    """Deterministic clock: each call returns a time one second later."""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


class ManualClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _make_candle(candle_id: int, x: float, y: float, note: str = "", minutes: int = 0, **kwargs) -> Candle:
    return Candle(id=candle_id, x=x, y=y, note=note, created_at=BASE_TIME + timedelta(minutes=minutes), **kwargs)


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def make_candle():
    """Factory for candles created `minutes` after BASE_TIME."""
    return _make_candle


@pytest.fixture
def app_config() -> AppConfig:
    """Default configuration."""
    return AppConfig.create_default()


@pytest.fixture
def memory_backend() -> InMemoryCandleBackend:
    """Empty in-memory store with a deterministic clock."""
    return InMemoryCandleBackend(clock=SteppingClock())


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def session(app_config, memory_backend, manual_clock):
    """Headless session running store calls inline, viewport measured at 1000x800."""
    session = SessionCoordinator(app_config, backend=memory_backend, runner=ImmediateTaskRunner(), clock=manual_clock)
    session.viewport.on_resize(1000, 800)
    yield session
    session.shutdown()
