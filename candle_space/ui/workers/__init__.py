"""Qt-based worker threads for background operations."""

from candle_space.ui.workers.store_worker import QtTaskRunner, StoreCallWorkerObject

__all__ = [
    "QtTaskRunner",
    "StoreCallWorkerObject",
]
