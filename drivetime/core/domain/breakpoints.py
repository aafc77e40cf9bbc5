"""
Breakpoint Set - Ordered, bounded travel-time budgets in minutes.
"""

import logging
from collections.abc import Iterable

from drivetime.core.domain.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BREAKPOINTS = (5, 10, 15)
MIN_BREAKPOINT = 1
MAX_BREAKPOINT = 15


class BreakpointSet:
    """
    Ordered sequence of travel-time budgets.

    Index is display order. Values are only changed through set(); the
    sequence is never reordered.
    """

    def __init__(
        self,
        values: Iterable[float] = DEFAULT_BREAKPOINTS,
        minimum: float = MIN_BREAKPOINT,
        maximum: float = MAX_BREAKPOINT,
    ):
        if minimum > maximum:
            raise ValidationError(f"Breakpoint minimum {minimum} exceeds maximum {maximum}")
        self.minimum = minimum
        self.maximum = maximum

        values = list(values)
        if not values:
            raise ValidationError("At least one breakpoint is required")
        for value in values:
            self._check_value(value)
        self._values = values

    def _check_value(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"Breakpoint must be a number, got {value!r}")
        if not self.minimum <= value <= self.maximum:
            raise ValidationError(
                f"Breakpoint {value} outside [{self.minimum}, {self.maximum}]"
            )

    def get(self) -> list[float]:
        """Return a copy of the current breakpoints in display order."""
        return list(self._values)

    def snapshot(self) -> tuple[float, ...]:
        """Immutable copy taken at click time."""
        return tuple(self._values)

    def set(self, index: int, value: float) -> None:
        """
        Replace the breakpoint at index.

        Args:
            index: Position in display order (0-based, no negative indexing)
            value: New budget in minutes

        Raises:
            ValidationError: If index or value is out of bounds. The set is
                left unchanged.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._values):
            raise ValidationError(f"Breakpoint index {index!r} outside [0, {len(self._values) - 1}]")
        self._check_value(value)

        self._values[index] = value
        logger.info(f"Drive time {index + 1} updated to: {value}")

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"BreakpointSet({self._values!r})"
