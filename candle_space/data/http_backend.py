"""
HTTP implementation of the candle store.

Talks to the candles REST collection served by candle_space_web:
    POST  {prefix}/candles          JSON array of drafts -> array of rows
    GET   {prefix}/candles?since=   rows ordered by created_at ascending
    PATCH {prefix}/candles/{id}     note / country_code
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from candle_space.core.dataclasses import Candle, parse_timestamp
from candle_space.core.exceptions import (
    CreateFailedError,
    ErrorCodes,
    LoadFailedError,
    PersistFailedError,
    StoreError,
    ValidationError,
)
from candle_space.core.validation import InputValidator

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from candle_space.core.dataclasses import CandleDraft

logger = logging.getLogger(__name__)


class HttpCandleBackend:
    """Candles collection over HTTP using httpx."""

    def __init__(
        self,
        base_url: str,
        api_prefix: str = "/api/v1",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the HTTP backend.

        Args:
            base_url: Root URL of the candles service
            api_prefix: Path prefix of the API routes
            timeout: Request timeout in seconds
            client: Optional preconfigured client (tests pass one with a MockTransport)

        """
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self._collection = f"{api_prefix.rstrip('/')}/candles"

    def close(self) -> None:
        self._client.close()

    def create(self, drafts: Sequence[CandleDraft]) -> list[Candle]:
        payload = [draft.to_dict() for draft in drafts]
        rows = self._request("POST", self._collection, CreateFailedError, json=payload)
        return self._parse_rows(rows, CreateFailedError)

    def update(self, candle_id: int | str, fields: dict[str, Any]) -> None:
        try:
            update = InputValidator.validate_mutable_fields(fields)
        except ValidationError as e:
            raise PersistFailedError(e.message, ErrorCodes.STORE_REJECTED) from e
        self._request("PATCH", f"{self._collection}/{candle_id}", PersistFailedError, json=update)

    def list_candles(self, since: datetime | None = None) -> list[Candle]:
        params = {"since": parse_timestamp(since).isoformat()} if since is not None else None
        rows = self._request("GET", self._collection, LoadFailedError, params=params)
        return self._parse_rows(rows, LoadFailedError)

    def _request(self, method: str, url: str, error_type: type[StoreError], **kwargs: Any) -> Any:
        """Send a request, mapping transport and status errors to error_type."""
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Candle store %s %s unreachable: %s", method, url, e)
            msg = f"Candle store unreachable: {e}"
            raise error_type(msg, ErrorCodes.STORE_UNREACHABLE) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            msg = f"{method} {url} not found"
            raise error_type(msg, ErrorCodes.NOT_FOUND, {"status": response.status_code})
        if response.is_error:
            logger.warning("Candle store rejected %s %s: %s %s", method, url, response.status_code, response.text)
            msg = f"Candle store rejected request ({response.status_code})"
            raise error_type(msg, ErrorCodes.STORE_REJECTED, {"status": response.status_code, "body": response.text})

        try:
            return response.json()
        except ValueError as e:
            msg = "Candle store returned invalid JSON"
            raise error_type(msg, ErrorCodes.STORE_BAD_RESPONSE) from e

    @staticmethod
    def _parse_rows(rows: Any, error_type: type[StoreError]) -> list[Candle]:
        if not isinstance(rows, list):
            msg = f"Expected a list of rows, got {type(rows).__name__}"
            raise error_type(msg, ErrorCodes.STORE_BAD_RESPONSE)
        try:
            return [Candle.from_dict(row) for row in rows]
        except ValidationError as e:
            raise error_type(e.message, ErrorCodes.STORE_BAD_RESPONSE) from e
