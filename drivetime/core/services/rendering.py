"""
Rendering Policy - Deterministic mapping of results to overlay graphics.

Polygons are colored by their position in ascending breakpoint order and
added largest-budget first, so the smallest region is drawn last and ends up
on top regardless of the order the service returned them in.
"""

from collections.abc import Sequence

from drivetime.core.domain.analysis import AnalysisPoint, ServiceAreaResult
from drivetime.core.domain.overlay import (
    Color,
    FillSymbol,
    MarkerGraphic,
    MarkerSymbol,
    OutlineSymbol,
    PolygonGraphic,
)
from drivetime.core.services.overlay_store import OverlayStore

DEFAULT_PALETTE = (
    Color(0, 255, 0, 0.3),    # green
    Color(255, 255, 0, 0.3),  # yellow
    Color(255, 0, 0, 0.3),    # red
)


class RenderingPolicy:
    """
    Turns clicks and results into graphics.
    """

    def __init__(
        self,
        palette: Sequence[Color] = DEFAULT_PALETTE,
        outline: OutlineSymbol | None = None,
        marker: MarkerSymbol | None = None,
    ):
        if not palette:
            raise ValueError("Palette must contain at least one color")
        self.palette = tuple(palette)
        self.outline = outline or OutlineSymbol()
        self.marker = marker or MarkerSymbol()

    def color_for(self, position: int) -> Color:
        """Color for the polygon at this position in ascending breakpoint order."""
        return self.palette[position % len(self.palette)]

    def marker_graphic(self, point: AnalysisPoint) -> MarkerGraphic:
        return MarkerGraphic(point=point, symbol=self.marker)

    def polygon_graphics(self, result: ServiceAreaResult) -> list[PolygonGraphic]:
        """
        Build polygon graphics in the order they must be added.

        Returns:
            Graphics sorted by descending breakpoint (largest first)
        """
        # sorted() is stable, equal breakpoints keep the service's order
        ascending = sorted(result.polygons, key=lambda p: p.breakpoint)
        graphics = [
            PolygonGraphic(
                geometry=polygon.geometry,
                symbol=FillSymbol(color=self.color_for(position), outline=self.outline),
                breakpoint=polygon.breakpoint,
            )
            for position, polygon in enumerate(ascending)
        ]
        graphics.reverse()
        return graphics

    def render_marker(self, point: AnalysisPoint, store: OverlayStore) -> None:
        store.add(self.marker_graphic(point))

    def render_result(self, result: ServiceAreaResult, store: OverlayStore) -> None:
        """Add all polygons of a result. Runs synchronously, never suspends."""
        for graphic in self.polygon_graphics(result):
            store.add(graphic)
