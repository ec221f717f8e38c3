"""
Coordinators for Candle Space.

Coordinators dispatch actions and perform side effects (remote store calls).
Connectors only read state and update widgets.
"""

from candle_space.ui.coordinators.annotation_coordinator import AnnotationCoordinator
from candle_space.ui.coordinators.hover_coordinator import HoverCoordinator, format_created_at
from candle_space.ui.coordinators.placement_coordinator import PlacementCoordinator
from candle_space.ui.coordinators.session_coordinator import SessionCoordinator
from candle_space.ui.coordinators.viewport_coordinator import ViewportCoordinator

__all__ = [
    "AnnotationCoordinator",
    "HoverCoordinator",
    "PlacementCoordinator",
    "SessionCoordinator",
    "ViewportCoordinator",
    "format_created_at",
]
