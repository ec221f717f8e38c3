"""
Context managers for Qt operations that require paired enable/disable calls.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QWidget


@contextmanager
def blocked_signals(widget: QWidget):
    """
    Context manager to safely block and unblock widget signals.

    Used when a connector writes store state back into an editor so the
    editor does not echo the change as a new user edit.

    Example:
        with blocked_signals(self.note_edit):
            self.note_edit.setPlainText(state.annotation.draft_note)

    """
    widget.blockSignals(True)
    try:
        yield
    finally:
        widget.blockSignals(False)
