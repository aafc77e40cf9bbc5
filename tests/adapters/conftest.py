"""
Pytest configuration for adapter tests.
"""
import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't touch the network"
    )


RING = [[-117.2, 34.0], [-117.1, 34.0], [-117.1, 34.1], [-117.2, 34.1], [-117.2, 34.0]]


@pytest.fixture
def ring():
    return [list(c) for c in RING]


@pytest.fixture
def ready_feature(ring):
    """Factory for features whose geometry is already a typed polygon."""
    def _feature(to_break=None, rings=None):
        attributes = {} if to_break is None else {"FromBreak": 0, "ToBreak": to_break}
        return {
            "attributes": attributes,
            "geometry": {"type": "polygon", "rings": rings or [ring], "spatialReference": {"wkid": 4326}},
        }
    return _feature


@pytest.fixture
def raw_feature(ring):
    """Factory for features whose geometry is bare rings."""
    def _feature(to_break=None, rings=None):
        attributes = {} if to_break is None else {"ToBreak": to_break}
        return {"attributes": attributes, "geometry": {"rings": rings or [ring]}}
    return _feature
