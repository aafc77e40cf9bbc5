"""
ArcGIS Payload Models - Wire format of solveServiceArea responses.

A feature's geometry shows up in one of two shapes:
- a ready polygon object: {"type": "polygon", "rings": [...], "spatialReference": {...}}
- raw rings: {"rings": [...]} or a bare list of rings

Both are validated here and normalized into PolygonGeometry so nothing
outside this adapter sees the difference.
"""

import math
from collections.abc import Sequence
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag, field_validator, model_validator

from drivetime.core.domain.analysis import AreaPolygon, PolygonGeometry, Ring
from drivetime.core.domain.errors import RemoteServiceError


def _close_rings(rings: list[list[list[float]]]) -> list[Ring]:
    closed = []
    for ring in rings:
        if len(ring) < 3:
            raise ValueError(f"ring needs at least 3 coordinates, got {len(ring)}")
        coords = []
        for coord in ring:
            if len(coord) < 2:
                raise ValueError(f"coordinate needs x and y, got {coord}")
            coords.append((float(coord[0]), float(coord[1])))  # drop z/m
        if coords[0] != coords[-1]:
            coords.append(coords[0])
        closed.append(coords)
    return closed


class SpatialReferencePayload(BaseModel):
    wkid: int | None = None
    latestWkid: int | None = None


class _RingsGeometry(BaseModel):
    rings: list[list[list[float]]] = Field(min_length=1)
    spatialReference: SpatialReferencePayload | None = None

    @field_validator("rings")
    @classmethod
    def _check_rings(cls, rings: list[list[list[float]]]) -> list[list[list[float]]]:
        _close_rings(rings)
        return rings

    def to_geometry(self, default_wkid: int) -> PolygonGeometry:
        wkid = default_wkid
        if self.spatialReference is not None:
            wkid = self.spatialReference.wkid or self.spatialReference.latestWkid or default_wkid
        return PolygonGeometry(rings=_close_rings(self.rings), wkid=wkid)


class ReadyPolygonPayload(_RingsGeometry):
    """Geometry already typed as a polygon by the service."""

    type: Literal["polygon"]


class RawRingsPayload(_RingsGeometry):
    """Untyped ring structure that has to be built into a polygon."""

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_rings(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"rings": value}
        return value


def _geometry_kind(value: Any) -> str:
    if isinstance(value, dict) and "type" in value:
        return "ready"
    if isinstance(value, ReadyPolygonPayload):
        return "ready"
    return "raw"


GeometryPayload = Annotated[
    Union[Annotated[ReadyPolygonPayload, Tag("ready")], Annotated[RawRingsPayload, Tag("raw")]],
    Discriminator(_geometry_kind),
]


class FeaturePayload(BaseModel):
    geometry: GeometryPayload
    attributes: dict[str, Any] = Field(default_factory=dict)


class FeatureSetPayload(BaseModel):
    features: list[FeaturePayload] | None = None
    spatialReference: SpatialReferencePayload | None = None


class ErrorPayload(BaseModel):
    code: int | None = None
    message: str = "Unknown error"
    details: list[str] = Field(default_factory=list)


class SolveServiceAreaResponse(BaseModel):
    saPolygons: FeatureSetPayload | None = None


def _match_breakpoint(value: Any, breakpoints: Sequence[float]) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    for breakpoint in breakpoints:
        if math.isclose(value, breakpoint, rel_tol=1e-9, abs_tol=1e-6):
            return breakpoint
    return None


def attribute_polygons(
    features: Sequence[FeaturePayload],
    breakpoints: Sequence[float],
    default_wkid: int,
) -> list[AreaPolygon]:
    """
    Attach a breakpoint to every feature.

    The ToBreak attribute wins when present; otherwise the feature's position
    selects the breakpoint at the same index of the request.

    Raises:
        RemoteServiceError: If a feature cannot be attributed to exactly one
            requested breakpoint
    """
    polygons = []
    for index, feature in enumerate(features):
        to_break = feature.attributes.get("ToBreak")
        if to_break is not None:
            breakpoint = _match_breakpoint(to_break, breakpoints)
            if breakpoint is None:
                raise RemoteServiceError(
                    f"Feature {index} has ToBreak={to_break!r}, not one of {list(breakpoints)}"
                )
        elif index < len(breakpoints):
            breakpoint = breakpoints[index]
        else:
            raise RemoteServiceError(
                f"Got more untagged features ({len(features)}) than breakpoints ({len(breakpoints)})"
            )

        from_break = feature.attributes.get("FromBreak")
        polygons.append(AreaPolygon(
            geometry=feature.geometry.to_geometry(default_wkid),
            breakpoint=breakpoint,
            from_break=float(from_break) if isinstance(from_break, (int, float)) and not isinstance(from_break, bool) else None,
        ))
    return polygons
