"""Placement checks for the timetable grid.

A candidate placement is legal when:
- its last period does not run past the day's final period
- its period range does not intersect another block on the same day

Boundary is checked first; a placement failing both reports the boundary.
Touching ranges (one ends at period N, the next starts at N + 1) are legal.

The start period itself must be a period of the day: a start outside
1..max_period(day) cannot come from a drop target and raises
InvalidPeriodError instead of being reported as a boundary rejection.
"""

from __future__ import annotations

from .errors import InvalidPeriodError
from .grid import TimeGrid
from .models import PlacementCheck, Weekday
from .registry import BlockRegistry


class PlacementValidator:
    """Pure boundary/overlap check over a registry and a grid."""

    def __init__(self, grid: TimeGrid, registry: BlockRegistry) -> None:
        self.grid = grid
        self.registry = registry

    def validate(
        self,
        day: Weekday,
        start_period: int,
        duration_periods: int,
        exclude_block_id: str | None = None,
    ) -> PlacementCheck:
        """Check whether a block may occupy ``start_period`` onwards on ``day``.

        Args:
            day: Target weekday
            start_period: First period the block would occupy
            duration_periods: Number of consecutive periods it occupies
            exclude_block_id: Block to ignore, normally the one being moved

        Returns:
            PlacementCheck with ok=True, or the rejection reason and the
            conflicting block for an overlap

        Raises:
            InvalidPeriodError: start_period is not a period of the day
            UnknownDayError: day is not one of the grid's weekdays
            ValueError: duration_periods is not positive
        """
        max_period = self.grid.max_period(day)
        if not 1 <= start_period <= max_period:
            msg = f"Period {start_period} is outside 1..{max_period} on {day}"
            raise InvalidPeriodError(msg)
        if duration_periods < 1:
            msg = f"duration_periods must be >= 1, got {duration_periods}"
            raise ValueError(msg)

        end_period = start_period + duration_periods - 1
        if end_period > max_period:
            return PlacementCheck.rejected("boundary")

        for existing in self.registry.list_assigned(day):
            if existing.id == exclude_block_id:
                continue
            overlaps = not (
                end_period < existing.start_period or start_period > existing.end_period
            )
            if overlaps:
                return PlacementCheck.rejected("overlap", conflicting=existing)

        return PlacementCheck.accepted()
