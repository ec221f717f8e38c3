"""
Qt-dependent utilities for the UI layer.

These utilities require PyQt6 and should only be used within the UI layer.
"""

from candle_space.ui.utils.config import ConfigManager
from candle_space.ui.utils.qt_context_managers import blocked_signals

__all__ = [
    "ConfigManager",
    "blocked_signals",
]
