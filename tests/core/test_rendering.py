"""
Tests for the Rendering Policy.
"""
import pytest

from drivetime.core.domain.overlay import BLACK, Color, MarkerGraphic, PolygonGraphic
from drivetime.core.services.overlay_store import OverlayStore
from drivetime.core.services.rendering import DEFAULT_PALETTE, RenderingPolicy


@pytest.mark.parametrize("order", [[5, 10, 15], [15, 10, 5], [10, 15, 5], [15, 5, 10]])
def test_polygons_added_largest_first(make_result, order):
    """Smallest budget is added last regardless of response order."""
    store = OverlayStore()
    RenderingPolicy().render_result(make_result(*order), store)

    assert [g.breakpoint for g in store.polygons] == [15, 10, 5]


@pytest.mark.parametrize("n", [1, 2, 4, 7])
def test_descending_order_for_any_arity(make_result, n):
    breakpoints = list(range(1, n + 1))
    graphics = RenderingPolicy().polygon_graphics(make_result(*reversed(breakpoints)))

    assert [g.breakpoint for g in graphics] == sorted(breakpoints, reverse=True)


def test_colors_follow_ascending_position(make_result):
    graphics = RenderingPolicy().polygon_graphics(make_result(15, 5, 10))
    colors = {g.breakpoint: g.symbol.color for g in graphics}

    assert colors[5] == DEFAULT_PALETTE[0]
    assert colors[10] == DEFAULT_PALETTE[1]
    assert colors[15] == DEFAULT_PALETTE[2]


def test_palette_cycles_modulo(make_result):
    """Ascending positions 0 and 3 share a color with a 3-color palette."""
    graphics = RenderingPolicy().polygon_graphics(make_result(1, 2, 3, 4, 5))
    colors = {g.breakpoint: g.symbol.color for g in graphics}

    assert colors[1] == colors[4]
    assert colors[2] == colors[5]
    assert colors[1] != colors[2]


def test_coloring_is_deterministic(make_result):
    policy = RenderingPolicy()
    first = policy.polygon_graphics(make_result(5, 10, 15))
    second = policy.polygon_graphics(make_result(15, 10, 5))

    assert [g.symbol for g in first] == [g.symbol for g in second]


def test_outline_is_fixed(make_result):
    graphics = RenderingPolicy().polygon_graphics(make_result(1, 2, 3, 4))

    assert all(g.symbol.outline.color == BLACK for g in graphics)
    assert all(g.symbol.outline.width == 1 for g in graphics)


def test_custom_palette(make_result):
    blue = Color(0, 0, 255, 0.5)
    graphics = RenderingPolicy(palette=[blue]).polygon_graphics(make_result(5, 10))
    assert all(g.symbol.color == blue for g in graphics)


def test_empty_palette_rejected():
    with pytest.raises(ValueError):
        RenderingPolicy(palette=[])


def test_render_marker(point):
    store = OverlayStore()
    RenderingPolicy().render_marker(point, store)

    assert len(store) == 1
    marker = store.graphics[0]
    assert isinstance(marker, MarkerGraphic)
    assert marker.point == point
    assert marker.symbol.size == 10


def test_render_result_keeps_geometry(make_result):
    result = make_result(5)
    store = OverlayStore()
    RenderingPolicy().render_result(result, store)

    graphic = store.graphics[0]
    assert isinstance(graphic, PolygonGraphic)
    assert graphic.geometry == result.polygons[0].geometry
