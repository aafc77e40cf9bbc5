"""
Overlay Domain Models - Visual primitives held by the overlay store.
"""

from dataclasses import dataclass, field
from typing import Literal

from drivetime.core.domain.analysis import AnalysisPoint, PolygonGeometry


@dataclass(frozen=True)
class Color:
    """RGBA color, alpha in [0, 1]."""

    red: int
    green: int
    blue: int
    alpha: float = 1.0

    def as_list(self) -> list[float]:
        return [self.red, self.green, self.blue, self.alpha]


RED = Color(255, 0, 0)
BLACK = Color(0, 0, 0)


@dataclass(frozen=True)
class MarkerSymbol:
    color: Color = RED
    size: float = 10


@dataclass(frozen=True)
class OutlineSymbol:
    color: Color = BLACK
    width: float = 1


@dataclass(frozen=True)
class FillSymbol:
    color: Color
    outline: OutlineSymbol = field(default_factory=OutlineSymbol)


@dataclass(frozen=True)
class MarkerGraphic:
    """The clicked location."""

    point: AnalysisPoint
    symbol: MarkerSymbol = field(default_factory=MarkerSymbol)
    kind: Literal["marker"] = "marker"


@dataclass(frozen=True)
class PolygonGraphic:
    """One filled reachability region."""

    geometry: PolygonGeometry
    symbol: FillSymbol
    breakpoint: float
    kind: Literal["polygon"] = "polygon"


OverlayGraphic = MarkerGraphic | PolygonGraphic
