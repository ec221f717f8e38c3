#!/usr/bin/env python3
"""
Custom Exception Classes for Candle Space
Provides structured error handling with specific exception types.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class CandleSpaceError(Exception):
    """Base exception for all Candle Space errors."""

    def __init__(self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ValidationError(CandleSpaceError):
    """Raised when input validation fails."""


class ConfigurationError(CandleSpaceError):
    """Raised when configuration is invalid."""


class StoreError(CandleSpaceError):
    """Raised when a call to the remote candle store fails."""


class LoadFailedError(StoreError):
    """Raised when the initial fetch of all candles fails."""


class CreateFailedError(StoreError):
    """Raised when a placement did not produce a candle."""


class PersistFailedError(StoreError):
    """Raised when an annotation update did not reach the store."""


# Error codes for specific error types
class ErrorCodes(StrEnum):
    """Standardized error codes."""

    # Validation errors
    INVALID_INPUT = "INVALID_INPUT"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INVALID_FORMAT = "INVALID_FORMAT"
    MISSING_REQUIRED = "MISSING_REQUIRED"
    IMMUTABLE_FIELD = "IMMUTABLE_FIELD"

    # Store errors
    STORE_UNREACHABLE = "STORE_UNREACHABLE"
    STORE_REJECTED = "STORE_REJECTED"
    STORE_BAD_RESPONSE = "STORE_BAD_RESPONSE"
    LOAD_FAILED = "LOAD_FAILED"
    CREATE_FAILED = "CREATE_FAILED"
    PERSIST_FAILED = "PERSIST_FAILED"
    NOT_FOUND = "NOT_FOUND"
    UNEXPECTED = "UNEXPECTED"

    # Configuration errors
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_MISSING = "CONFIG_MISSING"
