#!/usr/bin/env python3
"""
Application bootstrap utilities.

Provides shared, UI-agnostic setup for logging.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> Path | None:
    """
    Set up logging with proper path handling for app bundles.

    CANDLE_SPACE_DEBUG=1 switches to DEBUG, which logs every store action
    and state diff.

    Returns:
        Path to log file, or None if using default stderr.

    """
    level = logging.DEBUG if os.getenv("CANDLE_SPACE_DEBUG") else logging.WARNING
    log_file: Path | None = None

    if getattr(sys, "frozen", False):
        if sys.platform.startswith("darwin"):
            log_dir = Path.home() / "Library" / "Logs" / "CandleSpace"
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / "candle_space.log"
        else:
            log_file = Path(sys.executable).parent / "candle_space.log"

        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            handlers=[logging.FileHandler(log_file), logging.StreamHandler()],
        )
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    return log_file
