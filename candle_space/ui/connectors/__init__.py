"""
Store Connectors - Connect UI components to the Redux-style store.

Each connector is responsible for:
1. Subscribing to relevant state changes
2. Updating the component when state changes
3. Handling cleanup (unsubscribe) when component is destroyed

Connectors never dispatch; widget signals are routed to coordinators by the
main window.

Usage:
    # In main_window.py after creating the session:
    self.connector_manager = connect_all_components(self.session.store, self)
"""

from .annotation import AnnotationPopoverConnector
from .canvas import CanvasContentConnector
from .error import ErrorNotificationConnector
from .hover import HoverTooltipConnector
from .manager import StoreConnectorManager, connect_all_components
from .placement import PlacementControlsConnector
from .status import CandleCountConnector, UnsavedIndicatorConnector

__all__ = [
    "AnnotationPopoverConnector",
    "CandleCountConnector",
    "CanvasContentConnector",
    "ErrorNotificationConnector",
    "HoverTooltipConnector",
    "PlacementControlsConnector",
    "StoreConnectorManager",
    "UnsavedIndicatorConnector",
    "connect_all_components",
]
