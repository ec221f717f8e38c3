"""Services for Candle Space: candle cache, persist reconciliation, task runners."""

from candle_space.services.candle_cache import CandleCache
from candle_space.services.reconciliation import PendingWrite, PersistReconciler
from candle_space.services.task_runner import ImmediateTaskRunner, StoreResult, TaskRunner, run_store_call

__all__ = [
    "CandleCache",
    "ImmediateTaskRunner",
    "PendingWrite",
    "PersistReconciler",
    "StoreResult",
    "TaskRunner",
    "run_store_call",
]
