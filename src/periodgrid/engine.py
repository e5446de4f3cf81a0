from __future__ import annotations

from datetime import time

from loguru import logger

from .grid import TimeGrid
from .models import (
    WEEKDAYS,
    Block,
    GridSnapshot,
    MoveResult,
    Placement,
    PlacementCheck,
    RejectionReason,
    Weekday,
)
from .registry import BlockRegistry
from .validator import PlacementValidator

REJECTION_MESSAGES: dict[RejectionReason, str] = {
    "boundary": "Invalid Move: Block exceeds the maximum periods for the day.",
    "overlap": "Collision Detected: This slot is already occupied by {label}.",
    "not_found": "Block not found.",
    "not_assigned": "Block is already in the collection.",
}


class PlacementEngine:
    """Applies move commands to a registry, validating before every commit.

    A rejected move leaves the registry untouched; nothing is applied
    tentatively, so there is nothing to roll back.
    """

    def __init__(
        self,
        grid: TimeGrid | None = None,
        registry: BlockRegistry | None = None,
    ) -> None:
        self.grid = grid if grid is not None else TimeGrid()
        if registry is None:
            registry = BlockRegistry(
                reference_period_minutes=self.grid.reference_period_minutes
            )
        self.registry = registry
        self.validator = PlacementValidator(self.grid, self.registry)

    def create_block(
        self, label: str, duration_minutes: int, *, block_id: str | None = None
    ) -> Block:
        return self.registry.create(label, duration_minutes, block_id=block_id)

    def delete_block(self, block_id: str) -> bool:
        return self.registry.delete(block_id)

    def move_to_grid(self, block_id: str, day: Weekday, start_period: int) -> MoveResult:
        block = self.registry.find(block_id)
        if block is None:
            logger.warning(f"Move to {day} P{start_period} ignored, no block {block_id}")
            return self._rejected(block_id, PlacementCheck.rejected("not_found"))

        check = self.validator.validate(
            day=day,
            start_period=start_period,
            duration_periods=block.duration_periods,
            exclude_block_id=block_id,
        )
        if not check.ok:
            logger.warning(
                f"Rejected move of {block_id} '{block.label}' to {day} P{start_period}: "
                f"{check.reason}"
                + (f" with {check.conflicting_block_id}" if check.conflicting_block_id else "")
            )
            return self._rejected(block_id, check, block=block)

        placed = self.registry.place(block_id, Placement(day=day, start_period=start_period))
        logger.info(
            f"Placed {block_id} '{placed.label}' on {day} "
            f"P{placed.start_period}-P{placed.end_period}"
        )
        return MoveResult(ok=True, block_id=block_id, block=placed)

    def move_to_slot(self, block_id: str, day: Weekday, start_time: time | str) -> MoveResult:
        """Move to the period starting at ``start_time``, as a drop target reports it."""
        return self.move_to_grid(block_id, day, self.grid.period_number(day, start_time))

    def move_to_collection(self, block_id: str) -> MoveResult:
        block = self.registry.find(block_id)
        if block is None:
            return self._rejected(block_id, PlacementCheck.rejected("not_found"))
        if block.placement is None:
            return self._rejected(block_id, PlacementCheck.rejected("not_assigned"), block=block)

        unplaced = self.registry.unplace(block_id)
        logger.info(f"Moved {block_id} '{unplaced.label}' back to the collection")
        return MoveResult(ok=True, block_id=block_id, block=unplaced)

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            assigned=self.registry.list_assigned(),
            unassigned=self.registry.list_unassigned(),
        )

    def occupancy(self, day: Weekday) -> dict[int, str | None]:
        """Map every period of ``day`` to the id of the block covering it."""
        slots: dict[int, str | None] = dict.fromkeys(
            range(1, self.grid.max_period(day) + 1)
        )
        for block in self.registry.list_assigned(day):
            for period in range(block.start_period, block.end_period + 1):
                slots[period] = block.id
        return slots

    def free_periods(self) -> dict[Weekday, list[int]]:
        return {
            day: [period for period, owner in self.occupancy(day).items() if owner is None]
            for day in WEEKDAYS
        }

    def _rejected(
        self, block_id: str, check: PlacementCheck, block: Block | None = None
    ) -> MoveResult:
        template = REJECTION_MESSAGES[check.reason]
        return MoveResult(
            ok=False,
            block_id=block_id,
            block=block,
            reason=check.reason,
            conflicting_block_id=check.conflicting_block_id,
            conflicting_label=check.conflicting_label,
            message=template.format(label=check.conflicting_label),
        )
