"""
Candle Space Web - the shared candles collection as a FastAPI service.

Stores candles for every client and exposes create, list and update
operations over a REST API.
"""

__version__ = "0.1.0"
