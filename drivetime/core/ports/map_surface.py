"""
MapSurface Port - The host map that produces clicks and displays layers.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from drivetime.core.domain.analysis import AnalysisPoint

if TYPE_CHECKING:
    from drivetime.core.services.overlay_store import OverlayStore

ClickHandler = Callable[[AnalysisPoint], Awaitable[Any]]


class MapSurface(ABC):
    """
    Abstract interface for a host map.

    The core only needs to subscribe to clicks and to host a drawable layer.
    """

    @abstractmethod
    def on_click(self, handler: ClickHandler) -> None:
        """Register a coroutine function called with every clicked point."""
        ...

    @abstractmethod
    def add_layer(self, layer: "OverlayStore") -> None:
        """Host a layer whose graphics are drawn on top of the map."""
        ...
