#!/usr/bin/env python3
"""
Candle Space - Package Main Entry Point.

This module provides the entry point for the installed package:
    python -m candle_space
    candle-space (console script)
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from candle_space.app_bootstrap import setup_logging
from candle_space.ui.main_window import CandleSpaceMainWindow
from candle_space.ui.utils.config import ConfigManager


def main() -> int:
    """
    Main application entry point.

    Returns:
        Exit code (0 for success, non-zero for errors).

    """
    log_file = setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting Candle Space")
    if log_file:
        logger.info("Log file location: %s", log_file)

    app = QApplication(sys.argv)
    app.setApplicationName("CandleSpaceApp")
    app.setOrganizationName("CandleSpace")

    config_manager = ConfigManager()
    config = config_manager.config
    if config is None:
        logger.warning("Stored configuration is invalid, using defaults")

    window = CandleSpaceMainWindow(config)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
