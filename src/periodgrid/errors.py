"""Contract-violation errors for the timetable grid.

Expected placement rejections (boundary, overlap, unknown block) are returned
as values by the validator and the engine. The types below are raised only
when a caller hands the grid something it could never have obtained from it:
a time that is not a period boundary, a period number outside the day, a
malformed layout table or a duplicate block id.

Error codes:
- NOT_A_SLOT_BOUNDARY: no schedulable segment starts at the given time
- INVALID_PERIOD: period number outside 1..max_period(day)
- INVALID_LAYOUT: a day's segment table breaks the layout rules
- UNKNOWN_DAY: a day name that is not one of the grid's weekdays
- BLOCK_NOT_FOUND: no block with the given id
- DUPLICATE_BLOCK: a block with the given id already exists
"""

from __future__ import annotations


class GridContractError(ValueError):
    """Raised when a caller violates the grid's input contract.

    Attributes:
        code: Error code (e.g. "NOT_A_SLOT_BOUNDARY", "INVALID_PERIOD")
    """

    code = "GRID_CONTRACT"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"{self.code}: {message}")


class NotASlotBoundaryError(GridContractError):
    code = "NOT_A_SLOT_BOUNDARY"


class InvalidPeriodError(GridContractError):
    code = "INVALID_PERIOD"


class InvalidLayoutError(GridContractError):
    code = "INVALID_LAYOUT"


class UnknownDayError(GridContractError):
    code = "UNKNOWN_DAY"


class DuplicateBlockError(GridContractError):
    code = "DUPLICATE_BLOCK"


class BlockNotFoundError(KeyError):
    """Raised by ``BlockRegistry.get`` for an unknown block id."""

    code = "BLOCK_NOT_FOUND"

    def __init__(self, block_id: str):
        self.block_id = block_id
        super().__init__(block_id)

    def __str__(self) -> str:
        return f"{self.code}: no block with id '{self.block_id}'"
