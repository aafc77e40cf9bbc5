"""
API Map Surface - Map surface driven over HTTP.

Clicks arrive as requests from a browser map; the hosted layers are served
back as GeoJSON for the browser to draw.
"""

import logging
from typing import Any

from drivetime.core.domain.analysis import AnalysisPoint
from drivetime.core.ports.map_surface import ClickHandler, MapSurface
from drivetime.core.services.overlay_store import OverlayStore

logger = logging.getLogger(__name__)


class ApiMapSurface(MapSurface):
    """
    In-process map surface. Layers are drawn in the order they were added.
    """

    def __init__(self):
        self._handlers: list[ClickHandler] = []
        self.layers: list[OverlayStore] = []

    def on_click(self, handler: ClickHandler) -> None:
        self._handlers.append(handler)

    def add_layer(self, layer: OverlayStore) -> None:
        if layer not in self.layers:
            self.layers.append(layer)

    @property
    def has_listeners(self) -> bool:
        return bool(self._handlers)

    async def click(self, point: AnalysisPoint) -> list[Any]:
        """Deliver a click to every registered handler, in registration order."""
        if not self._handlers:
            logger.warning(f"Click at {point.as_facility()} ignored, no listeners")
        return [await handler(point) for handler in self._handlers]

    def to_geojson(self) -> dict[str, Any]:
        """All hosted layers merged into one FeatureCollection, bottom layer first."""
        features = []
        for layer in self.layers:
            for feature in layer.to_geojson()["features"]:
                feature["properties"]["layer"] = layer.name
                features.append(feature)
        return {"type": "FeatureCollection", "features": features}
