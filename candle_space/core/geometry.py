"""
Coordinate transforms between viewport (screen) and world (canvas) space.

World space is the full scrollable canvas. Screen space is relative to the
visible window. All functions here are pure.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from candle_space.core.constants import AnchorMode, MarkerStyle
from candle_space.core.dataclasses import Rect, ScrollOffset

if TYPE_CHECKING:
    from candle_space.core.dataclasses import Candle


def to_world(pointer_x: float, pointer_y: float, viewport_rect: Rect, scroll: ScrollOffset) -> tuple[float, float]:
    """Convert a pointer position in screen space to world coordinates."""
    return (
        pointer_x - viewport_rect.left + scroll.x,
        pointer_y - viewport_rect.top + scroll.y,
    )


def to_screen(world_x: float, world_y: float, viewport_rect: Rect, scroll: ScrollOffset) -> tuple[float, float]:
    """Project world coordinates back into screen space (inverse of to_world)."""
    return (
        world_x - scroll.x + viewport_rect.left,
        world_y - scroll.y + viewport_rect.top,
    )


def _clamp_axis(anchor: float, size: float, extent: float, margin: float) -> float:
    if extent <= 0:
        # Viewport not measured yet
        return anchor
    high = extent - size - margin
    if high < margin:
        return margin
    return min(max(anchor, margin), high)


def clamp_rect(
    anchor_x: float,
    anchor_y: float,
    rect_width: float,
    rect_height: float,
    viewport_width: float,
    viewport_height: float,
    margin: float,
) -> tuple[float, float]:
    """
    Position a fixed-size rectangle so it stays inside the viewport.

    The rectangle slides along an axis instead of overflowing it, staying in
    [margin, viewport - size - margin]. An axis whose viewport extent is zero
    (not yet measured) keeps the anchor value. When the rectangle is too large
    for the range, it is pinned to the margin.

    Returns:
        (left, top) of the rectangle in screen space

    """
    return (
        _clamp_axis(anchor_x, rect_width, viewport_width, margin),
        _clamp_axis(anchor_y, rect_height, viewport_height, margin),
    )


def anchor_rect(
    screen_x: float,
    screen_y: float,
    rect_width: float,
    rect_height: float,
    mode: AnchorMode = AnchorMode.ABOVE,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
) -> tuple[float, float]:
    """
    Get the unclamped top-left of a rectangle anchored to a screen point.

    ABOVE centres the rectangle horizontally and places its bottom offset_y
    above the point; BELOW places its top offset_y below the point; OFFSET
    shifts the top-left by (offset_x, offset_y).
    """
    match mode:
        case AnchorMode.ABOVE:
            return (screen_x - rect_width / 2, screen_y - rect_height - offset_y)
        case AnchorMode.BELOW:
            return (screen_x - rect_width / 2, screen_y + offset_y)
        case _:
            return (screen_x + offset_x, screen_y + offset_y)


def center_scroll(
    scroll_width: float,
    scroll_height: float,
    client_width: float,
    client_height: float,
) -> tuple[float, float] | None:
    """
    Get the scroll offset that centres the world in the viewport.

    Returns None before layout, when the client area has no size yet.
    """
    if client_width <= 0 or client_height <= 0:
        return None
    return (
        max(0.0, (scroll_width - client_width) / 2),
        max(0.0, (scroll_height - client_height) / 2),
    )


def is_inside_world(x: float, y: float, world_width: float, world_height: float) -> bool:
    return 0 <= x <= world_width and 0 <= y <= world_height


def candle_bounds(x: float, y: float, style: MarkerStyle | None = None) -> Rect:
    """World-space footprint of a candle drawn with its bottom-centre at (x, y)."""
    width, height = (style or MarkerStyle.get_default()).footprint()
    return Rect(left=x - width / 2, top=y - height, width=width, height=height)


def hit_test(candles: Iterable[Candle], world_x: float, world_y: float) -> Candle | None:
    """Get the top-most candle under a world point (later candles paint on top)."""
    hit = None
    for candle in candles:
        if candle_bounds(candle.x, candle.y, candle.style).contains(world_x, world_y):
            hit = candle
    return hit
