"""API routers for Candle Space Web."""
