"""
Redux/Vuex-style State Management for Candle Space.

This module implements a unidirectional data flow pattern:
    Action -> Dispatch -> Reducer -> New State -> Notify Subscribers

Usage:
    # Create store (typically in SessionCoordinator)
    store = CanvasStore()

    # Components subscribe to state changes
    store.subscribe(my_callback)

    # Dispatch actions to change state
    store.dispatch(Actions.placement_armed(style=MarkerStyle.REGULAR))
    store.dispatch(Actions.viewport_resized(width=1200, height=800))

    # Components react to state changes in their callbacks
    def my_callback(old_state: CanvasState, new_state: CanvasState):
        if old_state.placement_phase != new_state.placement_phase:
            self._update_cursor(new_state.placement_phase)

The candles themselves live in CandleCache. The store holds the interaction
state (placement, annotation, hover, viewport) plus the candle count and a
revision counter so subscribers know when to repaint.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field, replace
from enum import StrEnum, auto
from typing import Any

from candle_space.core.constants import CanvasLimits, LoadStatus, MarkerStyle, PlacementPhase
from candle_space.core.validation import InputValidator

logger = logging.getLogger(__name__)


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True)
class AnnotationState:
    """The annotation popover record."""

    open: bool = False
    target_index: int | None = None
    target_id: int | str | None = None
    draft_note: str = ""
    draft_country: str = ""
    anchor_x: float = 0.0  # World coordinates of the target candle
    anchor_y: float = 0.0
    is_reopen: bool = False


@dataclass(frozen=True)
class HoverState:
    """The hover tooltip record. Fields are retained while hidden."""

    visible: bool = False
    candle_id: int | str | None = None
    world_x: float = 0.0
    world_y: float = 0.0
    text: str = ""
    formatted_date: str = ""


@dataclass(frozen=True)
class ViewportState:
    """Measured size, position and scroll offset of the canvas viewport."""

    width: int = 0
    height: int = 0
    left: float = 0.0
    top: float = 0.0
    scroll_x: float = 0.0
    scroll_y: float = 0.0
    centered: bool = False

    @property
    def is_measured(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class CanvasState:
    """
    Immutable UI state container - Single source of truth for interaction state.

    State can only be changed by dispatching actions to the store.
    Components subscribe to state changes and react accordingly.

    State is organized into logical sections:
    - Placement: arm/place state machine, selected style, ghost preview
    - Annotation: the popover record for composing a note
    - Hover: the tooltip record
    - Viewport: size and scroll position
    - Candles: count/revision of the cache, load status
    - Errors: last store error, unsaved candle ids
    """

    # === Placement ===
    placement_phase: PlacementPhase = PlacementPhase.IDLE
    placement_style: MarkerStyle | None = None
    ghost_position: tuple[float, float] | None = None  # World coordinates
    pending_position: tuple[float, float] | None = None  # World coordinates of the click awaiting commit

    # === Annotation / Hover / Viewport ===
    annotation: AnnotationState = field(default_factory=AnnotationState)
    hover: HoverState = field(default_factory=HoverState)
    viewport: ViewportState = field(default_factory=ViewportState)

    # === Candles ===
    candle_count: int = 0
    candles_revision: int = 0  # Bumped on in-place mutations
    load_status: LoadStatus = LoadStatus.NOT_LOADED

    # === Errors ===
    last_error: str | None = None
    last_error_code: str | None = None
    unsaved_ids: tuple[Any, ...] = ()

    # === Policy (from AppConfig) ===
    note_limit: int = CanvasLimits.MAX_NOTE_LENGTH

    def to_dict(self) -> dict[str, Any]:
        """Serializable snapshot of the state."""
        return asdict(self)


# =============================================================================
# Actions
# =============================================================================


class ActionType(StrEnum):
    """All possible action types."""

    # Initialization
    STATE_INITIALIZED = auto()

    # Placement state machine
    PLACEMENT_ARMED = auto()
    PLACEMENT_CANCELLED = auto()
    GHOST_MOVED = auto()
    COMMIT_STARTED = auto()
    COMMIT_SUCCEEDED = auto()
    COMMIT_FAILED = auto()

    # Annotation workflow
    ANNOTATION_OPENED = auto()
    DRAFT_NOTE_CHANGED = auto()
    DRAFT_COUNTRY_CHANGED = auto()
    ANNOTATION_CLOSED = auto()

    # Hover inspection
    HOVER_ENTERED = auto()
    HOVER_LEFT = auto()

    # Viewport
    VIEWPORT_RESIZED = auto()
    VIEWPORT_SCROLLED = auto()
    VIEWPORT_CENTERED = auto()

    # Candles
    CANDLES_LOAD_STARTED = auto()
    CANDLES_LOADED = auto()
    CANDLES_LOAD_FAILED = auto()
    CANDLES_CHANGED = auto()

    # Errors
    UNSAVED_CHANGED = auto()
    ERROR_DISMISSED = auto()


@dataclass(frozen=True)
class Action:
    """
    Represents an action that can change state.

    Actions are immutable and describe what happened, not how to update state.
    """

    type: ActionType
    payload: dict[str, Any] | None = None


class Actions:
    """
    Action creators - factory methods for creating actions.

    Usage:
        store.dispatch(Actions.placement_armed(style=MarkerStyle.TALL))
    """

    @staticmethod
    def state_initialized(**values: Any) -> Action:
        """Create action for seeding state from configuration."""
        return Action(type=ActionType.STATE_INITIALIZED, payload=values)

    # === Placement ===

    @staticmethod
    def placement_armed(style: MarkerStyle | None = None) -> Action:
        """Create action for when the user activates a place control."""
        return Action(type=ActionType.PLACEMENT_ARMED, payload={"style": style})

    @staticmethod
    def placement_cancelled() -> Action:
        return Action(type=ActionType.PLACEMENT_CANCELLED)

    @staticmethod
    def ghost_moved(x: float, y: float) -> Action:
        """Create action for the ghost preview following the pointer (world coordinates)."""
        return Action(type=ActionType.GHOST_MOVED, payload={"x": x, "y": y})

    @staticmethod
    def commit_started(x: float, y: float) -> Action:
        """Create action for a placement click whose create request was issued."""
        return Action(type=ActionType.COMMIT_STARTED, payload={"x": x, "y": y})

    @staticmethod
    def commit_succeeded(candle_count: int) -> Action:
        return Action(type=ActionType.COMMIT_SUCCEEDED, payload={"candle_count": candle_count})

    @staticmethod
    def commit_failed(message: str, error_code: str | None = None) -> Action:
        return Action(type=ActionType.COMMIT_FAILED, payload={"message": message, "error_code": error_code})

    # === Annotation ===

    @staticmethod
    def annotation_opened(
        target_index: int,
        target_id: int | str,
        anchor_x: float,
        anchor_y: float,
        note: str = "",
        country: str = "",
        is_reopen: bool = False,
    ) -> Action:
        """Create action for opening the annotation popover for a candle."""
        return Action(
            type=ActionType.ANNOTATION_OPENED,
            payload={
                "target_index": target_index,
                "target_id": target_id,
                "anchor_x": anchor_x,
                "anchor_y": anchor_y,
                "note": note,
                "country": country,
                "is_reopen": is_reopen,
            },
        )

    @staticmethod
    def draft_note_changed(text: str) -> Action:
        return Action(type=ActionType.DRAFT_NOTE_CHANGED, payload={"text": text})

    @staticmethod
    def draft_country_changed(code: str) -> Action:
        return Action(type=ActionType.DRAFT_COUNTRY_CHANGED, payload={"code": code})

    @staticmethod
    def annotation_closed() -> Action:
        """Create action for closing the popover (submit, cancel or backdrop)."""
        return Action(type=ActionType.ANNOTATION_CLOSED)

    # === Hover ===

    @staticmethod
    def hover_entered(candle_id: int | str, world_x: float, world_y: float, text: str, formatted_date: str) -> Action:
        return Action(
            type=ActionType.HOVER_ENTERED,
            payload={
                "candle_id": candle_id,
                "world_x": world_x,
                "world_y": world_y,
                "text": text,
                "formatted_date": formatted_date,
            },
        )

    @staticmethod
    def hover_left() -> Action:
        return Action(type=ActionType.HOVER_LEFT)

    # === Viewport ===

    @staticmethod
    def viewport_resized(width: int, height: int, left: float = 0.0, top: float = 0.0) -> Action:
        """Create action for viewport size changes."""
        return Action(
            type=ActionType.VIEWPORT_RESIZED,
            payload={"width": width, "height": height, "left": left, "top": top},
        )

    @staticmethod
    def viewport_scrolled(x: float, y: float) -> Action:
        return Action(type=ActionType.VIEWPORT_SCROLLED, payload={"x": x, "y": y})

    @staticmethod
    def viewport_centered(x: float, y: float) -> Action:
        """Create action for the one-time centring after first layout."""
        return Action(type=ActionType.VIEWPORT_CENTERED, payload={"x": x, "y": y})

    # === Candles ===

    @staticmethod
    def candles_load_started() -> Action:
        return Action(type=ActionType.CANDLES_LOAD_STARTED)

    @staticmethod
    def candles_loaded(candle_count: int) -> Action:
        return Action(type=ActionType.CANDLES_LOADED, payload={"candle_count": candle_count})

    @staticmethod
    def candles_load_failed(message: str, error_code: str | None = None) -> Action:
        return Action(type=ActionType.CANDLES_LOAD_FAILED, payload={"message": message, "error_code": error_code})

    @staticmethod
    def candles_changed(candle_count: int) -> Action:
        """Create action for an in-place mutation or append in the cache."""
        return Action(type=ActionType.CANDLES_CHANGED, payload={"candle_count": candle_count})

    # === Errors ===

    @staticmethod
    def unsaved_changed(candle_ids: tuple[Any, ...]) -> Action:
        return Action(type=ActionType.UNSAVED_CHANGED, payload={"candle_ids": candle_ids})

    @staticmethod
    def error_dismissed() -> Action:
        return Action(type=ActionType.ERROR_DISMISSED)


# =============================================================================
# Reducer
# =============================================================================


def canvas_reducer(state: CanvasState, action: Action) -> CanvasState:
    """
    Pure function that takes current state and action, returns new state.

    This is the ONLY place where state changes are defined. The placement
    transition table is enforced here: actions that are not valid in the
    current phase leave the state unchanged.
    """
    payload = action.payload or {}

    match action.type:
        case ActionType.STATE_INITIALIZED:
            valid_fields = {k: v for k, v in payload.items() if k in CanvasState.__dataclass_fields__}
            return replace(state, **valid_fields)

        # === Placement ===

        case ActionType.PLACEMENT_ARMED:
            if state.placement_phase == PlacementPhase.AWAITING_COMMIT:
                return state
            return replace(
                state,
                placement_phase=PlacementPhase.ARMED,
                placement_style=payload.get("style"),
                ghost_position=None,
            )

        case ActionType.PLACEMENT_CANCELLED:
            if state.placement_phase != PlacementPhase.ARMED:
                return state
            return replace(state, placement_phase=PlacementPhase.IDLE, placement_style=None, ghost_position=None)

        case ActionType.GHOST_MOVED:
            if state.placement_phase != PlacementPhase.ARMED:
                return state
            return replace(state, ghost_position=(payload["x"], payload["y"]))

        case ActionType.COMMIT_STARTED:
            if state.placement_phase != PlacementPhase.ARMED:
                return state
            return replace(
                state,
                placement_phase=PlacementPhase.AWAITING_COMMIT,
                ghost_position=None,
                pending_position=(payload["x"], payload["y"]),
            )

        case ActionType.COMMIT_SUCCEEDED:
            return replace(
                state,
                placement_phase=PlacementPhase.IDLE
                if state.placement_phase == PlacementPhase.AWAITING_COMMIT
                else state.placement_phase,
                placement_style=None if state.placement_phase == PlacementPhase.AWAITING_COMMIT else state.placement_style,
                pending_position=None,
                candle_count=payload.get("candle_count", state.candle_count),
                candles_revision=state.candles_revision + 1,
            )

        case ActionType.COMMIT_FAILED:
            if state.placement_phase != PlacementPhase.AWAITING_COMMIT:
                # Late failure after the user moved on: only record it
                return replace(state, last_error=payload.get("message"), last_error_code=payload.get("error_code"))
            return replace(
                state,
                placement_phase=PlacementPhase.IDLE,
                placement_style=None,
                pending_position=None,
                last_error=payload.get("message"),
                last_error_code=payload.get("error_code"),
            )

        # === Annotation ===

        case ActionType.ANNOTATION_OPENED:
            return replace(
                state,
                annotation=AnnotationState(
                    open=True,
                    target_index=payload.get("target_index"),
                    target_id=payload.get("target_id"),
                    draft_note=InputValidator.truncate_note(payload.get("note", ""), state.note_limit),
                    draft_country=payload.get("country", "") or "",
                    anchor_x=payload.get("anchor_x", 0.0),
                    anchor_y=payload.get("anchor_y", 0.0),
                    is_reopen=payload.get("is_reopen", False),
                ),
            )

        case ActionType.DRAFT_NOTE_CHANGED:
            if not state.annotation.open:
                return state
            text = InputValidator.truncate_note(payload.get("text", ""), state.note_limit)
            return replace(state, annotation=replace(state.annotation, draft_note=text))

        case ActionType.DRAFT_COUNTRY_CHANGED:
            if not state.annotation.open:
                return state
            return replace(state, annotation=replace(state.annotation, draft_country=payload.get("code", "") or ""))

        case ActionType.ANNOTATION_CLOSED:
            return replace(state, annotation=AnnotationState())

        # === Hover ===

        case ActionType.HOVER_ENTERED:
            return replace(
                state,
                hover=HoverState(
                    visible=True,
                    candle_id=payload.get("candle_id"),
                    world_x=payload.get("world_x", 0.0),
                    world_y=payload.get("world_y", 0.0),
                    text=payload.get("text", ""),
                    formatted_date=payload.get("formatted_date", ""),
                ),
            )

        case ActionType.HOVER_LEFT:
            return replace(state, hover=replace(state.hover, visible=False))

        # === Viewport ===

        case ActionType.VIEWPORT_RESIZED:
            return replace(
                state,
                viewport=replace(
                    state.viewport,
                    width=max(0, int(payload.get("width", 0))),
                    height=max(0, int(payload.get("height", 0))),
                    left=payload.get("left", state.viewport.left),
                    top=payload.get("top", state.viewport.top),
                ),
            )

        case ActionType.VIEWPORT_SCROLLED:
            return replace(
                state,
                viewport=replace(state.viewport, scroll_x=payload.get("x", 0.0), scroll_y=payload.get("y", 0.0)),
            )

        case ActionType.VIEWPORT_CENTERED:
            return replace(
                state,
                viewport=replace(
                    state.viewport,
                    scroll_x=payload.get("x", 0.0),
                    scroll_y=payload.get("y", 0.0),
                    centered=True,
                ),
            )

        # === Candles ===

        case ActionType.CANDLES_LOAD_STARTED:
            return replace(state, load_status=LoadStatus.LOADING)

        case ActionType.CANDLES_LOADED:
            return replace(
                state,
                load_status=LoadStatus.LOADED,
                candle_count=payload.get("candle_count", 0),
                candles_revision=state.candles_revision + 1,
            )

        case ActionType.CANDLES_LOAD_FAILED:
            return replace(
                state,
                load_status=LoadStatus.FAILED,
                last_error=payload.get("message"),
                last_error_code=payload.get("error_code"),
            )

        case ActionType.CANDLES_CHANGED:
            return replace(
                state,
                candle_count=payload.get("candle_count", state.candle_count),
                candles_revision=state.candles_revision + 1,
            )

        # === Errors ===

        case ActionType.UNSAVED_CHANGED:
            return replace(state, unsaved_ids=tuple(payload.get("candle_ids", ())))

        case ActionType.ERROR_DISMISSED:
            return replace(state, last_error=None, last_error_code=None)

        case _:
            logger.warning("Unknown action type: %s", action.type)
            return state


# =============================================================================
# Selectors
# =============================================================================


class Selectors:
    """
    Selector functions to derive computed state.

    Use these instead of directly accessing state fields.
    """

    @staticmethod
    def is_idle(state: CanvasState) -> bool:
        return state.placement_phase == PlacementPhase.IDLE

    @staticmethod
    def is_armed(state: CanvasState) -> bool:
        return state.placement_phase == PlacementPhase.ARMED

    @staticmethod
    def is_awaiting_commit(state: CanvasState) -> bool:
        return state.placement_phase == PlacementPhase.AWAITING_COMMIT

    @staticmethod
    def is_annotation_open(state: CanvasState) -> bool:
        return state.annotation.open

    @staticmethod
    def is_tooltip_visible(state: CanvasState) -> bool:
        return state.hover.visible

    @staticmethod
    def unsaved_count(state: CanvasState) -> int:
        return len(state.unsaved_ids)

    @staticmethod
    def has_error(state: CanvasState) -> bool:
        return state.last_error is not None


# =============================================================================
# Store
# =============================================================================

# Type for subscriber callbacks
StateChangeCallback = Callable[[CanvasState, CanvasState], None]
UnsubscribeFunction = Callable[[], None]


class CanvasStore:
    """
    Central store that holds state and manages subscriptions.

    The store:
    - Holds the single source of truth for interaction state
    - Dispatches actions through the reducer
    - Notifies subscribers when state changes
    - Queues actions dispatched from subscriber callbacks
    """

    def __init__(self, initial_state: CanvasState | None = None) -> None:
        """
        Initialize the store.

        Args:
            initial_state: Optional initial state, defaults to CanvasState()

        """
        self._state = initial_state or CanvasState()
        self._subscribers: list[StateChangeCallback] = []
        self._is_dispatching = False
        self._queued: list[Action] = []

        logger.info("CanvasStore initialized with state: %s", self._state)

    @property
    def state(self) -> CanvasState:
        """Get current state (read-only)."""
        return self._state

    @property
    def is_dispatching(self) -> bool:
        """Check if a dispatch is currently in progress."""
        return self._is_dispatching

    def dispatch(self, action: Action) -> None:
        """Dispatch an action to change state."""
        if self._is_dispatching:
            msg = f"Cannot dispatch {action.type} while a dispatch is in progress."
            raise RuntimeError(msg)

        try:
            self._is_dispatching = True
            logger.debug("ACTION DISPATCHED: %s | Payload: %s", action.type, action.payload)

            # Get new state from reducer
            old_state = self._state
            new_state = canvas_reducer(old_state, action)

            # Only notify if state actually changed
            if old_state != new_state:
                diff = self._get_state_diff(old_state, new_state)
                self._state = new_state
                logger.debug("STATE CHANGED: %s | Diff: %s", action.type, diff)
                self._notify_subscribers(old_state, new_state)
            else:
                logger.debug("STATE UNCHANGED: %s", action.type)

        finally:
            self._is_dispatching = False

        self._drain_queue()

    def dispatch_safe(self, action: Action) -> None:
        """
        Dispatch sync if safe, queued until the current dispatch finishes otherwise.
        Use this from subscriber callbacks.
        """
        if self._is_dispatching:
            logger.debug("DISPATCH_SAFE: Queued %s (in dispatch)", action.type)
            self._queued.append(action)
        else:
            self.dispatch(action)

    def subscribe(self, callback: StateChangeCallback) -> UnsubscribeFunction:
        """Subscribe to state changes."""
        self._subscribers.append(callback)
        cb_name = getattr(callback, "__qualname__", str(callback))
        logger.debug("SUBSCRIBER ADDED: %s | Total subscribers: %d", cb_name, len(self._subscribers))

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
                logger.debug("SUBSCRIBER REMOVED: %s", cb_name)

        return unsubscribe

    def initialize_from_config(self, config: Any) -> None:
        """Seed policy values from application configuration."""
        self.dispatch(Actions.state_initialized(note_limit=getattr(config, "max_note_length", CanvasLimits.MAX_NOTE_LENGTH)))

    def _drain_queue(self) -> None:
        while self._queued and not self._is_dispatching:
            self.dispatch(self._queued.pop(0))

    def _notify_subscribers(self, old_state: CanvasState, new_state: CanvasState) -> None:
        """Notify all subscribers of state change."""
        for callback in self._subscribers[:]:  # Copy list to allow unsubscribe during iteration
            try:
                callback(old_state, new_state)
            except Exception as e:
                logger.exception("Error in subscriber callback: %s", e)

    def _get_state_diff(self, old_state: CanvasState, new_state: CanvasState) -> dict[str, tuple[Any, Any]]:
        """Get dictionary of changed fields for logging."""
        diff = {}
        for name in CanvasState.__dataclass_fields__:
            old_val = getattr(old_state, name)
            new_val = getattr(new_state, name)
            if old_val != new_val:
                diff[name] = (old_val, new_val)
        return diff

