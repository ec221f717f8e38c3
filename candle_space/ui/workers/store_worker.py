#!/usr/bin/env python3
"""
Store Worker for Candle Space
Runs remote store calls off the GUI thread.

Uses the recommended QThread + Worker Object pattern instead of subclassing QThread.
Completions are delivered back on the GUI thread as queued signal events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from candle_space.core.exceptions import ErrorCodes, StoreError
from candle_space.services.task_runner import FailureCallback, StoreResult, SuccessCallback, run_store_call

logger = logging.getLogger(__name__)


class StoreCallWorkerObject(QObject):
    """
    Worker object that performs one store call.

    This object is moved to a QThread to perform work off the main thread.
    """

    completed = pyqtSignal(object)  # StoreResult
    finished = pyqtSignal()  # Signals work is complete

    def __init__(self, call: Callable[[], Any]) -> None:
        super().__init__()
        self._call = call

    def run(self) -> None:
        """Run the store call. Called when thread starts."""
        try:
            self.completed.emit(run_store_call(self._call))
        except Exception as e:
            logger.exception("Store worker error")
            error = StoreError(f"Unexpected error: {e}", ErrorCodes.UNEXPECTED)
            self.completed.emit(StoreResult.failure(error))
        finally:
            self.finished.emit()


class _CompletionReceiver(QObject):
    """Lives on the GUI thread and hands a StoreResult to the callbacks."""

    def __init__(self, on_success: SuccessCallback, on_failure: FailureCallback, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._on_success = on_success
        self._on_failure = on_failure

    @pyqtSlot(object)
    def deliver(self, result: StoreResult) -> None:
        if result.ok:
            self._on_success(result.value)
        else:
            self._on_failure(result.error)


class QtTaskRunner(QObject):
    """
    TaskRunner that executes each store call on its own QThread.

    The runner keeps references to running threads until they finish.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._jobs: dict[int, tuple[QThread, StoreCallWorkerObject, _CompletionReceiver]] = {}

    @property
    def active_count(self) -> int:
        return len(self._jobs)

    def submit(self, call: Callable[[], Any], on_success: SuccessCallback, on_failure: FailureCallback) -> None:
        thread = QThread()
        worker = StoreCallWorkerObject(call)
        receiver = _CompletionReceiver(on_success, on_failure, parent=self)

        # Move worker to thread
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.completed.connect(receiver.deliver)

        # Clean up when worker finishes
        worker.finished.connect(thread.quit)
        thread.finished.connect(self._on_thread_finished)

        self._jobs[id(thread)] = (thread, worker, receiver)
        thread.start()

    @pyqtSlot()
    def _on_thread_finished(self) -> None:
        thread = self.sender()
        job = self._jobs.pop(id(thread), None)
        if job is None:
            return
        job[0].wait()
        job[2].deleteLater()

    def wait_for_all(self, timeout_ms: int = 5000) -> None:
        """Block until running store calls finish (used on shutdown)."""
        for thread, _worker, _receiver in list(self._jobs.values()):
            if not thread.wait(timeout_ms):
                logger.warning("Store call still running after %d ms", timeout_ms)
