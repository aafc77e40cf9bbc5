"""
Tests for ApiMapSurface.
"""
from unittest.mock import AsyncMock

import pytest

from drivetime.adapters.map.api_surface import ApiMapSurface
from drivetime.core.services.overlay_store import OverlayStore
from drivetime.core.services.rendering import RenderingPolicy

pytestmark = pytest.mark.unit


@pytest.mark.asyncio
async def test_click_reaches_handlers(point):
    surface = ApiMapSurface()
    handler = AsyncMock(return_value="run")
    surface.on_click(handler)

    results = await surface.click(point)

    handler.assert_awaited_once_with(point)
    assert results == ["run"]
    assert surface.has_listeners


@pytest.mark.asyncio
async def test_click_without_listeners(point):
    assert await ApiMapSurface().click(point) == []


def test_layers_added_once():
    surface = ApiMapSurface()
    layer = OverlayStore()
    surface.add_layer(layer)
    surface.add_layer(layer)
    assert surface.layers == [layer]


def test_geojson_merges_layers(point):
    surface = ApiMapSurface()
    first, second = OverlayStore(name="a"), OverlayStore(name="b")
    surface.add_layer(first)
    surface.add_layer(second)
    RenderingPolicy().render_marker(point, first)
    RenderingPolicy().render_marker(point, second)

    collection = surface.to_geojson()

    assert [f["properties"]["layer"] for f in collection["features"]] == ["a", "b"]
