"""
Tests for the Breakpoint Set.
"""
import pytest

from drivetime.core.domain.breakpoints import BreakpointSet
from drivetime.core.domain.errors import ValidationError


def test_breakpoint_defaults():
    assert BreakpointSet().get() == [5, 10, 15]


@pytest.mark.parametrize("index,value", [(0, 1), (1, 7.5), (2, 15)])
def test_set_stores_value_at_index_only(index, value):
    breakpoints = BreakpointSet([5, 10, 15])
    before = breakpoints.get()

    breakpoints.set(index, value)

    after = breakpoints.get()
    assert after[index] == value
    assert [v for i, v in enumerate(after) if i != index] == [v for i, v in enumerate(before) if i != index]


@pytest.mark.parametrize("value", [0, 0.99, 15.01, 16, -5])
def test_set_rejects_out_of_bounds_value(value):
    breakpoints = BreakpointSet([5, 10, 15])

    with pytest.raises(ValidationError):
        breakpoints.set(1, value)

    assert breakpoints.get() == [5, 10, 15]


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_set_rejects_out_of_bounds_index(index):
    breakpoints = BreakpointSet([5, 10, 15])

    with pytest.raises(ValidationError):
        breakpoints.set(index, 5)

    assert breakpoints.get() == [5, 10, 15]


def test_set_rejects_non_numbers():
    breakpoints = BreakpointSet()
    with pytest.raises(ValidationError):
        breakpoints.set(0, "5")
    with pytest.raises(ValidationError):
        breakpoints.set(0, True)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        BreakpointSet().set(0, 99)


def test_arbitrary_arity():
    breakpoints = BreakpointSet([3])
    assert len(breakpoints) == 1

    many = BreakpointSet([1, 2, 3, 4, 5, 6])
    many.set(5, 12)
    assert many.get() == [1, 2, 3, 4, 5, 12]


def test_constructor_validation():
    with pytest.raises(ValidationError):
        BreakpointSet([])
    with pytest.raises(ValidationError):
        BreakpointSet([5, 20])
    with pytest.raises(ValidationError):
        BreakpointSet([5], minimum=10, maximum=1)


def test_snapshot_is_isolated_from_later_edits():
    breakpoints = BreakpointSet([5, 10, 15])
    snapshot = breakpoints.snapshot()

    breakpoints.set(0, 2)

    assert snapshot == (5, 10, 15)


def test_get_returns_copy():
    breakpoints = BreakpointSet([5, 10, 15])
    values = breakpoints.get()
    values[0] = 99
    assert breakpoints.get() == [5, 10, 15]


def test_custom_bounds():
    breakpoints = BreakpointSet([30, 60], minimum=10, maximum=120)
    breakpoints.set(1, 120)
    assert breakpoints.get() == [30, 120]
