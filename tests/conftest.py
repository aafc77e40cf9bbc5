"""
Shared fixtures for drive-time tests.
"""
import pytest

from drivetime.core.domain.analysis import (
    AnalysisPoint,
    AreaPolygon,
    Credential,
    PolygonGeometry,
    ServiceAreaResult,
)


def _square(size: float) -> list[tuple[float, float]]:
    """Closed clockwise (ArcGIS outer) square ring centred on the origin."""
    return [(-size, -size), (-size, size), (size, size), (size, -size), (-size, -size)]


def _make_result(*breakpoints: float) -> ServiceAreaResult:
    return ServiceAreaResult(polygons=[
        AreaPolygon(geometry=PolygonGeometry(rings=[_square(b / 100)]), breakpoint=b)
        for b in breakpoints
    ])


@pytest.fixture
def make_result():
    """Factory: one square polygon per breakpoint, in the given order."""
    return _make_result


@pytest.fixture
def point():
    return AnalysisPoint(longitude=-117.19, latitude=34.05)


@pytest.fixture
def credential():
    return Credential(token="secret-token", authority_url="https://www.arcgis.com")
