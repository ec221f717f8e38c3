#!/usr/bin/env python3
"""
Annotation Coordinator for Candle Space.

Owns the popover workflow for writing a note on a candle: open, edit the
draft, submit (optimistic local update + queued remote write) or cancel.
"""

import logging
from typing import TYPE_CHECKING

from candle_space.core.constants import AnchorMode, CandleField, LabelText, MarkerStyle
from candle_space.core.dataclasses import Rect, ScrollOffset
from candle_space.core.geometry import anchor_rect, clamp_rect, to_screen
from candle_space.ui.store import Actions

if TYPE_CHECKING:
    from candle_space.core.countries import CountryCatalog
    from candle_space.core.dataclasses_config import AppConfig
    from candle_space.services.candle_cache import CandleCache
    from candle_space.services.reconciliation import PersistReconciler
    from candle_space.ui.store import CanvasStore

logger = logging.getLogger(__name__)


class AnnotationCoordinator:
    """Coordinates the annotation popover for a single target candle."""

    def __init__(
        self,
        store: "CanvasStore",
        cache: "CandleCache",
        reconciler: "PersistReconciler",
        config: "AppConfig",
        catalog: "CountryCatalog | None" = None,
    ) -> None:
        self.store = store
        self.cache = cache
        self.reconciler = reconciler
        self.config = config
        self.catalog = catalog
        logger.info("AnnotationCoordinator initialized")

    def open(
        self,
        target_index: int,
        target_id: int | str,
        anchor_x: float,
        anchor_y: float,
        existing_note: str = "",
        existing_country: str = "",
        is_reopen: bool = False,
    ) -> None:
        """Open the popover for a candle anchored at its world position."""
        self.store.dispatch(
            Actions.annotation_opened(
                target_index=target_index,
                target_id=target_id,
                anchor_x=anchor_x,
                anchor_y=anchor_y,
                note=existing_note,
                country=existing_country,
                is_reopen=is_reopen,
            )
        )
        logger.debug("Annotation opened for candle %s (index %d)", target_id, target_index)

    def open_for_candle(self, candle_id: int | str) -> bool:
        """
        Reopen the popover for an existing candle, pre-filled with its note.

        Only available when the deployment allows re-editing shared notes.
        """
        if not self.config.allow_reopen:
            return False
        if self.store.state.annotation.open:
            return False
        index = self.cache.index_of(candle_id)
        if index is None:
            logger.warning("Cannot reopen candle %s: not in cache", candle_id)
            return False
        candle = self.cache.get(index)
        self.open(index, candle.id, candle.x, candle.y, candle.note, candle.country_code, is_reopen=True)
        return True

    def update_draft_note(self, text: str) -> str:
        """
        Store the draft note, silently truncated to the note limit.

        Returns:
            The stored draft

        """
        self.store.dispatch(Actions.draft_note_changed(text))
        return self.store.state.annotation.draft_note

    def update_draft_country(self, code: str) -> bool:
        """Set the draft country if it belongs to the catalog (empty clears it)."""
        if not self.store.state.annotation.open:
            return False
        code = code or ""
        if self.catalog is not None and not self.catalog.accepts(code):
            logger.warning("Ignoring unknown country code %r", code)
            return False
        self.store.dispatch(Actions.draft_country_changed(code.upper()))
        return True

    def submit(self) -> bool:
        """
        Apply the draft locally, queue the remote write and close the popover.

        The local update is never rolled back; a failed write is retried by
        the reconciler and reported as unsaved.

        Returns:
            False if no popover was open

        """
        annotation = self.store.state.annotation
        if not annotation.open or annotation.target_id is None:
            return False

        fields = {
            CandleField.NOTE.value: annotation.draft_note,
            CandleField.COUNTRY_CODE.value: annotation.draft_country,
        }

        index = self.cache.update_by_id(annotation.target_id, **fields)
        if index is not None:
            if index != annotation.target_index:
                logger.debug("Candle %s moved from index %s to %d", annotation.target_id, annotation.target_index, index)
            self.store.dispatch(Actions.candles_changed(candle_count=len(self.cache)))

        self.reconciler.persist(annotation.target_id, fields)
        self.store.dispatch(Actions.annotation_closed())
        logger.info("Annotation submitted for candle %s", annotation.target_id)
        return True

    def cancel(self) -> None:
        """Close the popover without persisting anything."""
        if self.store.state.annotation.open:
            self.store.dispatch(Actions.annotation_closed())

    def counter_text(self) -> str:
        """Live counter under the note editor, e.g. "12/200"."""
        state = self.store.state
        return LabelText.NOTE_COUNTER.format(len(state.annotation.draft_note), state.note_limit)

    def popover_position(self) -> tuple[float, float] | None:
        """
        Top-left of the popover in viewport coordinates.

        Recomputed from the candle's world position and the current scroll
        offset, then clamped inside the viewport.
        """
        state = self.store.state
        if not state.annotation.open:
            return None

        viewport = state.viewport
        screen_x, screen_y = to_screen(
            state.annotation.anchor_x,
            state.annotation.anchor_y,
            Rect(width=viewport.width, height=viewport.height),
            ScrollOffset(x=viewport.scroll_x, y=viewport.scroll_y),
        )

        candle = self.cache.find(state.annotation.target_id)
        style = candle.style if candle and candle.style else MarkerStyle.get_default()
        candle_height = style.footprint()[1]

        left, top = anchor_rect(
            screen_x,
            screen_y,
            self.config.popover_width,
            self.config.popover_height,
            mode=AnchorMode.ABOVE,
            offset_y=candle_height + self.config.popover_gap,
        )
        return clamp_rect(
            left,
            top,
            self.config.popover_width,
            self.config.popover_height,
            viewport.width,
            viewport.height,
            self.config.tooltip_margin,
        )
