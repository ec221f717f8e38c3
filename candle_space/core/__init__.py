"""Core domain types, geometry and validation for Candle Space."""
