from __future__ import annotations

import math
import uuid

from loguru import logger

from .errors import BlockNotFoundError, DuplicateBlockError
from .models import Block, Placement, Weekday, weekday_index


def duration_to_periods(duration_minutes: int, period_minutes: int) -> int:
    """Whole periods needed to hold ``duration_minutes``, rounded up."""
    if duration_minutes <= 0:
        msg = f"duration_minutes must be positive, got {duration_minutes}"
        raise ValueError(msg)
    return max(1, math.ceil(duration_minutes / period_minutes))


class BlockRegistry:
    """In-memory store of every block, placed or not.

    Insertion order of the underlying dict is the collection order: a block
    sent back to the collection is re-inserted and so lands at the end.
    """

    def __init__(self, reference_period_minutes: int = 60) -> None:
        if reference_period_minutes <= 0:
            msg = f"reference_period_minutes must be positive, got {reference_period_minutes}"
            raise ValueError(msg)
        self.reference_period_minutes = reference_period_minutes
        self._blocks: dict[str, Block] = {}

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def create(
        self,
        label: str,
        duration_minutes: int,
        *,
        block_id: str | None = None,
    ) -> Block:
        block_id = block_id or uuid.uuid4().hex
        if block_id in self._blocks:
            msg = f"Block id '{block_id}' is already registered"
            raise DuplicateBlockError(msg)

        block = Block(
            id=block_id,
            label=label.strip(),
            duration_minutes=duration_minutes,
            duration_periods=duration_to_periods(
                duration_minutes, self.reference_period_minutes
            ),
        )
        self._blocks[block.id] = block
        logger.debug(
            f"Created block {block.id} '{block.label}' "
            f"({block.duration_minutes} min, {block.duration_periods} periods)"
        )
        return block

    def delete(self, block_id: str) -> bool:
        """Remove a block wherever it lives; unknown ids are a no-op."""
        block = self._blocks.pop(block_id, None)
        if block is None:
            logger.debug(f"Delete ignored, no block {block_id}")
            return False
        logger.debug(f"Deleted block {block_id} '{block.label}'")
        return True

    def get(self, block_id: str) -> Block:
        try:
            return self._blocks[block_id]
        except KeyError:
            raise BlockNotFoundError(block_id) from None

    def find(self, block_id: str) -> Block | None:
        return self._blocks.get(block_id)

    def list_unassigned(self) -> list[Block]:
        return [block for block in self._blocks.values() if block.placement is None]

    def list_assigned(self, day: Weekday | None = None) -> list[Block]:
        assigned = [
            block
            for block in self._blocks.values()
            if block.placement is not None
            and (day is None or block.placement.day == day)
        ]
        return sorted(
            assigned,
            key=lambda block: (
                weekday_index(block.placement.day),
                block.placement.start_period,
            ),
        )

    def place(self, block_id: str, placement: Placement) -> Block:
        block = self.get(block_id).model_copy(update={"placement": placement})
        self._blocks[block_id] = block
        return block

    def unplace(self, block_id: str) -> Block:
        block = self._blocks.pop(block_id)
        block = block.model_copy(update={"placement": None})
        self._blocks[block_id] = block
        return block

    def clear(self) -> None:
        self._blocks.clear()
