"""Backend selection from configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from candle_space.core.constants import BackendKind
from candle_space.core.exceptions import ConfigurationError, ErrorCodes
from candle_space.data.http_backend import HttpCandleBackend
from candle_space.data.memory_backend import InMemoryCandleBackend

if TYPE_CHECKING:
    from candle_space.core.dataclasses_config import AppConfig
    from candle_space.data.protocol import CandleBackend

logger = logging.getLogger(__name__)


def create_backend(config: AppConfig) -> CandleBackend:
    """Create the remote store implementation named by config.backend."""
    match config.backend:
        case BackendKind.MEMORY:
            logger.info("Using in-memory candle store")
            return InMemoryCandleBackend()
        case BackendKind.HTTP:
            logger.info("Using candle store at %s%s", config.backend_url, config.api_prefix)
            return HttpCandleBackend(
                base_url=config.backend_url,
                api_prefix=config.api_prefix,
                timeout=config.request_timeout_seconds,
            )
        case _:
            msg = f"Unknown backend: {config.backend}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
