#!/usr/bin/env python3
"""
Candle Space.

Light a candle anywhere on a shared canvas, leave a short letter on it, and
read the letters others have left.
"""

__version__ = "0.1.0"
__author__ = "Candle Space Team"
__description__ = "Shared canvas of candles with short notes"
