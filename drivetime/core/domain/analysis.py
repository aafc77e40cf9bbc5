"""
Analysis Domain Models - Points, polygons and credentials exchanged between
the orchestrator and its collaborators.

Uses Pydantic for validation. All models are frozen: once a click has been
turned into an AnalysisPoint nothing downstream can alter it.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

WGS84 = 4326

Coordinate = tuple[float, float]
Ring = list[Coordinate]


class AnalysisPoint(BaseModel):
    """A clicked location."""

    model_config = ConfigDict(frozen=True)

    longitude: float = Field(ge=-180, le=180)
    latitude: float = Field(ge=-90, le=90)
    wkid: int = WGS84

    def as_facility(self) -> str:
        """Serialize as the `"lon,lat"` pair the service expects."""
        return f"{self.longitude},{self.latitude}"


class PolygonGeometry(BaseModel):
    """Polygon as a list of closed rings in a spatial reference."""

    model_config = ConfigDict(frozen=True)

    rings: list[Ring] = Field(min_length=1)
    wkid: int = WGS84


class AreaPolygon(BaseModel):
    """One reachability region, attributed to the breakpoint that produced it."""

    model_config = ConfigDict(frozen=True)

    geometry: PolygonGeometry
    breakpoint: float
    from_break: float | None = None


class ServiceAreaResult(BaseModel):
    """Normalized service response. Always holds at least one polygon."""

    model_config = ConfigDict(frozen=True)

    polygons: list[AreaPolygon] = Field(min_length=1)

    @property
    def breakpoints(self) -> list[float]:
        return [p.breakpoint for p in self.polygons]


class Credential(BaseModel):
    """Bearer token plus the authority it was issued by."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1, repr=False)
    authority_url: str
    expires_at: datetime | None = None
