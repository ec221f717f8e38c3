#!/usr/bin/env python
"""
Module entry point for Candle Space.

This allows the application to be run as:
    python -m candle_space
or via the installed console script:
    candle-space
"""

from __future__ import annotations

import logging
import sys

logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point for the module."""
    try:
        from candle_space.main import main as app_main

        logger.info("Starting Candle Space via module entry point")
        return app_main()
    except ImportError:
        logger.exception("Failed to import application")
        return 1
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
