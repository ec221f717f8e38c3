"""
Tests for the Redux-style canvas store.

Tests CanvasState, Actions, canvas_reducer, Selectors, and CanvasStore.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from candle_space.core.constants import LoadStatus, MarkerStyle, PlacementPhase
from candle_space.ui.store import (
    Action,
    Actions,
    ActionType,
    CanvasState,
    CanvasStore,
    Selectors,
    canvas_reducer,
)

# ============================================================================
# Test CanvasState Dataclass
# ============================================================================


class TestCanvasState:
    """Tests for CanvasState immutable dataclass."""

    def test_creates_with_defaults(self) -> None:
        """Creates state with default values."""
        state = CanvasState()

        assert state.placement_phase == PlacementPhase.IDLE
        assert state.ghost_position is None
        assert state.annotation.open is False
        assert state.hover.visible is False
        assert state.load_status == LoadStatus.NOT_LOADED
        assert state.note_limit == 200

    def test_is_frozen(self) -> None:
        """State is immutable (frozen dataclass)."""
        state = CanvasState()

        with pytest.raises(AttributeError):
            state.candle_count = 3

    def test_to_dict(self) -> None:
        assert CanvasState().to_dict()["annotation"]["draft_note"] == ""


# ============================================================================
# Test Reducer: placement state machine
# ============================================================================


def armed(style: MarkerStyle | None = None) -> CanvasState:
    return canvas_reducer(CanvasState(), Actions.placement_armed(style))


def awaiting() -> CanvasState:
    return canvas_reducer(armed(), Actions.commit_started(620, 540))


class TestPlacementReducer:
    """Tests for the IDLE -> ARMED -> AWAITING_COMMIT -> IDLE transitions."""

    def test_arm_from_idle(self) -> None:
        state = armed(MarkerStyle.TALL)

        assert state.placement_phase == PlacementPhase.ARMED
        assert state.placement_style == MarkerStyle.TALL

    def test_rearm_switches_style(self) -> None:
        state = canvas_reducer(armed(MarkerStyle.TALL), Actions.placement_armed(MarkerStyle.WIDE))

        assert state.placement_phase == PlacementPhase.ARMED
        assert state.placement_style == MarkerStyle.WIDE

    def test_arm_ignored_while_awaiting(self) -> None:
        state = awaiting()

        assert canvas_reducer(state, Actions.placement_armed()) is state

    def test_cancel_only_from_armed(self) -> None:
        assert canvas_reducer(armed(), Actions.placement_cancelled()).placement_phase == PlacementPhase.IDLE
        assert canvas_reducer(awaiting(), Actions.placement_cancelled()).placement_phase == PlacementPhase.AWAITING_COMMIT

    def test_ghost_follows_only_while_armed(self) -> None:
        assert canvas_reducer(armed(), Actions.ghost_moved(5, 6)).ghost_position == (5, 6)
        assert canvas_reducer(CanvasState(), Actions.ghost_moved(5, 6)).ghost_position is None

    def test_commit_started_requires_armed(self) -> None:
        state = CanvasState()

        assert canvas_reducer(state, Actions.commit_started(1, 2)) is state

    def test_commit_started_clears_ghost(self) -> None:
        state = canvas_reducer(canvas_reducer(armed(), Actions.ghost_moved(1, 1)), Actions.commit_started(620, 540))

        assert state.placement_phase == PlacementPhase.AWAITING_COMMIT
        assert state.ghost_position is None
        assert state.pending_position == (620, 540)

    def test_commit_succeeded_returns_to_idle(self) -> None:
        state = canvas_reducer(awaiting(), Actions.commit_succeeded(candle_count=4))

        assert state.placement_phase == PlacementPhase.IDLE
        assert state.pending_position is None
        assert state.candle_count == 4
        assert state.candles_revision == 1

    def test_commit_failed_returns_to_idle_with_error(self) -> None:
        state = canvas_reducer(awaiting(), Actions.commit_failed("store down", "STORE_UNREACHABLE"))

        assert state.placement_phase == PlacementPhase.IDLE
        assert state.last_error == "store down"
        assert state.last_error_code == "STORE_UNREACHABLE"
        assert Selectors.has_error(state)

    def test_late_commit_failure_does_not_disarm(self) -> None:
        """A failure arriving after the user re-armed only records the error."""
        state = canvas_reducer(armed(), Actions.commit_failed("late"))

        assert state.placement_phase == PlacementPhase.ARMED
        assert state.last_error == "late"


# ============================================================================
# Test Reducer: annotation, hover, viewport, candles
# ============================================================================


class TestAnnotationReducer:
    """Tests for the popover record."""

    def test_open_sets_target(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.annotation_opened(3, 17, 620, 540))

        assert state.annotation.open
        assert (state.annotation.target_index, state.annotation.target_id) == (3, 17)
        assert state.annotation.draft_note == ""

    def test_draft_is_truncated_to_limit(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.annotation_opened(0, 1, 0, 0))
        state = canvas_reducer(state, Actions.draft_note_changed("x" * 250))

        assert state.annotation.draft_note == "x" * 200

    def test_truncation_uses_configured_limit(self) -> None:
        state = CanvasState(note_limit=10)
        state = canvas_reducer(state, Actions.annotation_opened(0, 1, 0, 0, note="a" * 30))

        assert state.annotation.draft_note == "a" * 10

    def test_draft_ignored_when_closed(self) -> None:
        state = CanvasState()

        assert canvas_reducer(state, Actions.draft_note_changed("hello")) is state
        assert canvas_reducer(state, Actions.draft_country_changed("PT")) is state

    def test_close_resets_record(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.annotation_opened(0, 1, 0, 0, note="hi"))
        state = canvas_reducer(state, Actions.annotation_closed())

        assert state.annotation.open is False
        assert state.annotation.draft_note == ""


class TestHoverAndViewportReducer:
    def test_hover_left_keeps_content(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.hover_entered(1, 10, 20, "Peace", "01/15/24 12:00:00"))
        state = canvas_reducer(state, Actions.hover_left())

        assert state.hover.visible is False
        assert state.hover.text == "Peace"
        assert state.hover.candle_id == 1

    def test_viewport_resize_clamps_negative(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.viewport_resized(-5, 800, 10, 20))

        assert (state.viewport.width, state.viewport.height) == (0, 800)
        assert not state.viewport.is_measured

    def test_viewport_centered_once_flag(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.viewport_centered(1000, 600))

        assert state.viewport.centered
        assert (state.viewport.scroll_x, state.viewport.scroll_y) == (1000, 600)


class TestCandlesReducer:
    def test_load_lifecycle(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.candles_load_started())
        assert state.load_status == LoadStatus.LOADING

        state = canvas_reducer(state, Actions.candles_loaded(candle_count=12))
        assert state.load_status == LoadStatus.LOADED
        assert state.candle_count == 12

    def test_load_failed(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.candles_load_failed("down", "LOAD_FAILED"))

        assert state.load_status == LoadStatus.FAILED
        assert state.last_error == "down"

    def test_changed_bumps_revision(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.candles_changed(candle_count=0))

        assert state.candles_revision == 1

    def test_unsaved_and_dismiss(self) -> None:
        state = canvas_reducer(CanvasState(last_error="x"), Actions.unsaved_changed((4, 5)))

        assert Selectors.unsaved_count(state) == 2
        assert canvas_reducer(state, Actions.error_dismissed()).last_error is None

    def test_state_initialized_ignores_unknown_fields(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.state_initialized(note_limit=80, bogus=True))

        assert state.note_limit == 80


# ============================================================================
# Test Selectors
# ============================================================================


class TestSelectors:
    def test_phase_selectors(self) -> None:
        assert Selectors.is_idle(CanvasState())
        assert Selectors.is_armed(armed())
        assert Selectors.is_awaiting_commit(awaiting())
        assert not Selectors.is_armed(awaiting())

    def test_annotation_and_tooltip_visibility(self) -> None:
        state = canvas_reducer(CanvasState(), Actions.annotation_opened(0, 1, 0, 0))

        assert Selectors.is_annotation_open(state)
        assert not Selectors.is_tooltip_visible(state)

    def test_error_and_unsaved(self) -> None:
        assert not Selectors.has_error(CanvasState())
        assert Selectors.unsaved_count(CanvasState(unsaved_ids=(1, 2, 3))) == 3


# ============================================================================
# Test CanvasStore
# ============================================================================


class TestCanvasStore:
    """Tests for CanvasStore dispatch and subscriptions."""

    def test_subscriber_notified_on_change(self) -> None:
        store = CanvasStore()
        callback = MagicMock()
        store.subscribe(callback)

        store.dispatch(Actions.placement_armed())

        callback.assert_called_once()
        old_state, new_state = callback.call_args[0]
        assert old_state.placement_phase == PlacementPhase.IDLE
        assert new_state.placement_phase == PlacementPhase.ARMED

    def test_no_notification_without_change(self) -> None:
        store = CanvasStore()
        callback = MagicMock()
        store.subscribe(callback)

        store.dispatch(Actions.placement_cancelled())

        callback.assert_not_called()

    def test_unsubscribe(self) -> None:
        store = CanvasStore()
        callback = MagicMock()
        unsubscribe = store.subscribe(callback)

        unsubscribe()
        store.dispatch(Actions.placement_armed())

        callback.assert_not_called()

    def test_nested_dispatch_raises_in_subscriber(self) -> None:
        """Dispatching from a subscriber is an error; the error is logged, not raised."""
        store = CanvasStore()
        errors = []

        def nested(_old: CanvasState, _new: CanvasState) -> None:
            try:
                store.dispatch(Actions.ghost_moved(1, 1))
            except RuntimeError as e:
                errors.append(e)

        store.subscribe(nested)
        store.dispatch(Actions.placement_armed())

        assert len(errors) == 1
        assert store.state.ghost_position is None

    def test_dispatch_safe_queues_until_dispatch_finishes(self) -> None:
        store = CanvasStore()

        def follow_up(old: CanvasState, new: CanvasState) -> None:
            if old.placement_phase != new.placement_phase and new.placement_phase == PlacementPhase.ARMED:
                store.dispatch_safe(Actions.ghost_moved(7, 8))

        store.subscribe(follow_up)
        store.dispatch(Actions.placement_armed())

        assert store.state.ghost_position == (7, 8)
        assert not store.is_dispatching

    def test_failing_subscriber_does_not_block_others(self) -> None:
        store = CanvasStore()
        store.subscribe(MagicMock(side_effect=ValueError("boom")))
        callback = MagicMock()
        store.subscribe(callback)

        store.dispatch(Actions.placement_armed())

        callback.assert_called_once()

    def test_initialize_from_config(self, app_config) -> None:
        app_config.max_note_length = 120
        store = CanvasStore()

        store.initialize_from_config(app_config)

        assert store.state.note_limit == 120

    def test_equal_state_is_not_replaced(self) -> None:
        store = CanvasStore()
        before = store.state

        store.dispatch(Action(type=ActionType.ERROR_DISMISSED))

        assert store.state is before
