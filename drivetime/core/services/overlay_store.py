"""
Overlay Store - The single writable collection of graphics shown on the map.

Append-only with one destructive operation, clear(), which always removes
everything.
"""

import logging
from typing import Any

from drivetime.core.domain.analysis import WGS84, PolygonGeometry, Ring
from drivetime.core.domain.overlay import MarkerGraphic, OverlayGraphic, PolygonGraphic

logger = logging.getLogger(__name__)


def _signed_area(ring: Ring) -> float:
    """Shoelace area; positive for counterclockwise rings."""
    return sum(x1 * y2 - x2 * y1 for (x1, y1), (x2, y2) in zip(ring, ring[1:])) / 2


def _contains(ring: Ring, point: tuple[float, float]) -> bool:
    """Even-odd point-in-ring test."""
    x, y = point
    inside = False
    for (x1, y1), (x2, y2) in zip(ring, ring[1:]):
        if (y1 > y) != (y2 > y) and x < (x2 - x1) * (y - y1) / (y2 - y1) + x1:
            inside = not inside
    return inside


def polygon_to_geojson(geometry: PolygonGeometry) -> dict[str, Any]:
    """
    Convert ArcGIS rings into a GeoJSON Polygon or MultiPolygon.

    ArcGIS marks outer rings clockwise and holes counterclockwise; GeoJSON
    wants the opposite winding and one ring list per outer part. Each hole
    goes to the first outer ring that contains it. A hole with no enclosing
    outer ring is kept as a part of its own.
    """
    parts: list[list[Ring]] = []
    holes: list[Ring] = []
    for ring in geometry.rings:
        if _signed_area(ring) < 0:
            parts.append([list(reversed(ring))])
        else:
            holes.append(ring)

    for hole in holes:
        owner = next((part for part in parts if _contains(part[0], hole[0])), None)
        if owner is None:
            parts.append([list(hole)])
        else:
            owner.append(list(reversed(hole)))

    coordinates = [[[list(coord) for coord in ring] for ring in part] for part in parts]
    if len(coordinates) == 1:
        return {"type": "Polygon", "coordinates": coordinates[0]}
    return {"type": "MultiPolygon", "coordinates": coordinates}


class OverlayStore:
    """
    Ordered graphics layer. Later graphics are drawn on top.
    """

    def __init__(self, name: str = "drive-time"):
        self.name = name
        self._graphics: list[OverlayGraphic] = []

    def add(self, graphic: OverlayGraphic) -> None:
        self._graphics.append(graphic)

    def clear(self) -> None:
        """Remove every graphic. Safe to call when already empty."""
        count = len(self._graphics)
        self._graphics.clear()
        logger.info(f"All graphics cleared ({count} removed)")

    @property
    def graphics(self) -> tuple[OverlayGraphic, ...]:
        return tuple(self._graphics)

    @property
    def markers(self) -> list[MarkerGraphic]:
        return [g for g in self._graphics if isinstance(g, MarkerGraphic)]

    @property
    def polygons(self) -> list[PolygonGraphic]:
        return [g for g in self._graphics if isinstance(g, PolygonGraphic)]

    def __len__(self) -> int:
        return len(self._graphics)

    def to_geojson(self) -> dict[str, Any]:
        """
        Export the layer as a GeoJSON FeatureCollection in draw order.

        Symbol colors travel as feature properties so a web map can style
        each feature without knowing about breakpoints.

        Raises:
            ValueError: If any graphic is not in WGS84, which GeoJSON requires
        """
        for graphic in self._graphics:
            wkid = graphic.point.wkid if isinstance(graphic, MarkerGraphic) else graphic.geometry.wkid
            if wkid != WGS84:
                raise ValueError(f"GeoJSON export needs wkid {WGS84}, layer holds wkid {wkid}")

        features = []
        for order, graphic in enumerate(self._graphics):
            if isinstance(graphic, MarkerGraphic):
                features.append({
                    "type": "Feature",
                    "geometry": {
                        "type": "Point",
                        "coordinates": [graphic.point.longitude, graphic.point.latitude],
                    },
                    "properties": {
                        "kind": graphic.kind,
                        "order": order,
                        "color": graphic.symbol.color.as_list(),
                        "size": graphic.symbol.size,
                    },
                })
            else:
                features.append({
                    "type": "Feature",
                    "geometry": polygon_to_geojson(graphic.geometry),
                    "properties": {
                        "kind": graphic.kind,
                        "order": order,
                        "breakpoint": graphic.breakpoint,
                        "fill": graphic.symbol.color.as_list(),
                        "outline": graphic.symbol.outline.color.as_list(),
                        "outline_width": graphic.symbol.outline.width,
                    },
                })
        return {"type": "FeatureCollection", "name": self.name, "features": features}
