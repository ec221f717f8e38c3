"""
Tests for coordinate transforms and rectangle clamping.
"""

from __future__ import annotations

import pytest

from candle_space.core.constants import AnchorMode, MarkerStyle
from candle_space.core.dataclasses import Rect, ScrollOffset
from candle_space.core.geometry import (
    anchor_rect,
    candle_bounds,
    center_scroll,
    clamp_rect,
    hit_test,
    is_inside_world,
    to_screen,
    to_world,
)

# ============================================================================
# Test to_world / to_screen
# ============================================================================


class TestCoordinateTransforms:
    """Tests for screen <-> world conversion."""

    def test_to_world_adds_scroll(self) -> None:
        """A click at (120, 340) with scroll (500, 200) lands at (620, 540)."""
        assert to_world(120, 340, Rect(0, 0, 1000, 800), ScrollOffset(500, 200)) == (620, 540)

    def test_to_world_subtracts_viewport_origin(self) -> None:
        """Viewport position on screen is removed before scrolling."""
        assert to_world(150, 100, Rect(50, 60, 1000, 800), ScrollOffset(10, 20)) == (110, 60)

    @pytest.mark.parametrize(
        ("point", "rect", "scroll"),
        [
            ((0.0, 0.0), Rect(0, 0, 800, 600), ScrollOffset(0, 0)),
            ((120.5, 340.25), Rect(12, 48, 800, 600), ScrollOffset(500, 200)),
            ((999.0, 1.0), Rect(-5, 3, 1000, 800), ScrollOffset(2000, 1200)),
        ],
    )
    def test_round_trip(self, point, rect, scroll) -> None:
        """to_screen is the inverse of to_world."""
        world = to_world(*point, rect, scroll)
        assert to_screen(*world, rect, scroll) == pytest.approx(point)

    def test_is_inside_world_includes_edges(self) -> None:
        """Points on the world edge count as inside."""
        assert is_inside_world(0, 0, 3000, 2000)
        assert is_inside_world(3000, 2000, 3000, 2000)
        assert not is_inside_world(-1, 10, 3000, 2000)
        assert not is_inside_world(10, 2000.5, 3000, 2000)


# ============================================================================
# Test clamp_rect
# ============================================================================


class TestClampRect:
    """Tests for keeping fixed-size rectangles inside the viewport."""

    def test_near_right_edge_slides_left(self) -> None:
        """A 220 wide tooltip near the right edge of a 1000 wide viewport is pinned at 772."""
        left, top = clamp_rect(1010, -20, 220, 80, 1000, 800, 8)

        assert left == 772
        assert top == 8

    def test_inside_anchor_is_unchanged(self) -> None:
        """A rectangle that fits keeps its anchor."""
        assert clamp_rect(100, 200, 220, 80, 1000, 800, 8) == (100, 200)

    @pytest.mark.parametrize("anchor", [(-500, -500), (5000, 5000), (400, 300), (8, 712)])
    def test_result_stays_within_margins(self, anchor) -> None:
        """Clamped rectangles stay inside [margin, viewport - size - margin]."""
        left, top = clamp_rect(*anchor, 220, 80, 1000, 800, 8)

        assert 8 <= left <= 1000 - 220 - 8
        assert 8 <= top <= 800 - 80 - 8

    def test_unmeasured_viewport_keeps_anchor(self) -> None:
        """A zero-sized viewport axis does not clamp."""
        assert clamp_rect(-40, 900, 220, 80, 0, 0, 8) == (-40, 900)

    def test_rect_larger_than_viewport_pins_to_margin(self) -> None:
        """A rectangle wider than the viewport sits at the margin."""
        assert clamp_rect(300, 10, 400, 80, 300, 800, 8) == (8, 10)


# ============================================================================
# Test anchor_rect / center_scroll
# ============================================================================


class TestAnchorRect:
    """Tests for anchoring a rectangle to a screen point."""

    def test_above_centres_horizontally(self) -> None:
        assert anchor_rect(500, 400, 400, 300, AnchorMode.ABOVE, offset_y=72) == (300, 28)

    def test_below_places_top_under_point(self) -> None:
        assert anchor_rect(500, 400, 200, 100, AnchorMode.BELOW, offset_y=10) == (400, 410)

    def test_offset_shifts_top_left(self) -> None:
        assert anchor_rect(990, 10, 220, 80, AnchorMode.OFFSET, offset_x=20, offset_y=-30) == (1010, -20)


class TestCenterScroll:
    """Tests for one-time centring of the world."""

    def test_centres_world(self) -> None:
        assert center_scroll(3000, 2000, 1000, 800) == (1000, 600)

    def test_world_smaller_than_viewport(self) -> None:
        """Offsets are never negative."""
        assert center_scroll(500, 400, 1000, 800) == (0, 0)

    def test_unmeasured_returns_none(self) -> None:
        assert center_scroll(3000, 2000, 0, 800) is None
        assert center_scroll(3000, 2000, 1000, 0) is None


# ============================================================================
# Test candle_bounds / hit_test
# ============================================================================


class TestHitTest:
    """Tests for finding the candle under a world point."""

    def test_bounds_are_bottom_centred(self) -> None:
        """A regular candle at (100, 200) occupies x 85..115, y 140..200."""
        bounds = candle_bounds(100, 200)

        assert (bounds.left, bounds.top, bounds.right, bounds.bottom) == (85, 140, 115, 200)

    def test_bounds_follow_style(self) -> None:
        width, height = MarkerStyle.TALL.footprint()
        bounds = candle_bounds(100, 200, MarkerStyle.TALL)

        assert (bounds.width, bounds.height) == (width, height)

    def test_hit_and_miss(self, make_candle) -> None:
        candle = make_candle(1, 100, 200, "hello")

        assert hit_test([candle], 100, 180) is candle
        assert hit_test([candle], 300, 180) is None

    def test_topmost_candle_wins(self, make_candle) -> None:
        """Later candles paint on top, so they win overlapping hits."""
        below = make_candle(1, 100, 200)
        above = make_candle(2, 110, 200)

        assert hit_test([below, above], 105, 190) is above
