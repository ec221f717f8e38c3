"""Widgets for the Candle Space desktop client."""

from candle_space.ui.widgets.annotation_popover import AnnotationPopover, PopoverBackdrop
from candle_space.ui.widgets.candle_painter import CandlePainter
from candle_space.ui.widgets.hover_tooltip import HoverTooltip
from candle_space.ui.widgets.world_canvas import WorldCanvas, WorldWidget

__all__ = [
    "AnnotationPopover",
    "CandlePainter",
    "HoverTooltip",
    "PopoverBackdrop",
    "WorldCanvas",
    "WorldWidget",
]
