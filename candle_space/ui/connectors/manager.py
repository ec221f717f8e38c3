"""
Connector manager.

Creates every store connector for the main window and disconnects them on
shutdown.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .annotation import AnnotationPopoverConnector
from .canvas import CanvasContentConnector
from .error import ErrorNotificationConnector
from .hover import HoverTooltipConnector
from .placement import PlacementControlsConnector
from .status import CandleCountConnector, UnsavedIndicatorConnector

if TYPE_CHECKING:
    from candle_space.ui.protocols import MainWindowProtocol
    from candle_space.ui.store import CanvasStore

logger = logging.getLogger(__name__)


class StoreConnectorManager:
    """Manages all store connectors."""

    def __init__(self, store: CanvasStore, main_window: MainWindowProtocol) -> None:
        self.store = store
        self.main_window = main_window
        self.connectors: list = []

        self._connect_all()

    def _connect_all(self) -> None:
        """Create all connectors."""
        self.connectors = [
            CanvasContentConnector(self.store, self.main_window),
            PlacementControlsConnector(self.store, self.main_window),
            AnnotationPopoverConnector(self.store, self.main_window),
            HoverTooltipConnector(self.store, self.main_window),
            CandleCountConnector(self.store, self.main_window),
            UnsavedIndicatorConnector(self.store, self.main_window),
            ErrorNotificationConnector(self.store, self.main_window),
        ]
        logger.info("Connected %d components to store", len(self.connectors))

    def disconnect_all(self) -> None:
        """Disconnect all connectors (cleanup)."""
        for connector in self.connectors:
            connector.disconnect()
        self.connectors.clear()
        logger.info("Disconnected all components from store")


def connect_all_components(store: CanvasStore, main_window: MainWindowProtocol) -> StoreConnectorManager:
    """
    Connect all components to the store.

    Call this after creating the store in main_window.
    """
    return StoreConnectorManager(store, main_window)
