"""Conversion between an editing session and the backend's timetable rows.

The backend stores one row per placed block (day, first period, subject,
length in periods) scoped by department and semester. Saving sends every
placed block in one bulk sync; loading rebuilds a fresh engine from the
stored rows. Unplaced blocks are session-local and are never sent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from .config import Settings, get_settings
from .engine import PlacementEngine
from .errors import GridContractError
from .grid import TimeGrid
from .models import Block, MoveResult, Weekday

Department = Literal["CT", "EC", "MECH"]

DEPARTMENT_NAMES: dict[Department, str] = {
    "CT": "Computer Technology",
    "EC": "Electronics & Communication",
    "MECH": "Mechanical Engineering",
}


class TimetableBlockRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    day_of_week: Weekday
    period_number: int = Field(ge=1)
    subject_name: str = Field(min_length=1, max_length=120)
    duration_periods: int = Field(ge=1)
    teacher_id: int | None = None


class TimetableSyncRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    department: Department
    semester: int = Field(ge=1, le=8)
    blocks: list[TimetableBlockRecord] = Field(default_factory=list)


class TimetableRow(BaseModel):
    """Row as returned by the timetable listing endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: int
    department: Department
    semester: int = Field(ge=1, le=8)
    day_of_week: Weekday
    period_number: int
    subject_name: str = Field(min_length=1, max_length=120)
    duration_periods: int = Field(ge=1)
    teacher_id: int | None = None


class SyncResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool
    message: str = ""
    deleted: int = Field(default=0, ge=0)
    inserted: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


@dataclass
class LoadResult:
    engine: PlacementEngine
    skipped: list[MoveResult] = field(default_factory=list)


def block_to_record(block: Block) -> TimetableBlockRecord:
    if block.placement is None:
        msg = f"Block '{block.id}' is not placed and cannot be synced"
        raise ValueError(msg)
    return TimetableBlockRecord(
        day_of_week=block.placement.day,
        period_number=block.placement.start_period,
        subject_name=block.label,
        duration_periods=block.duration_periods,
    )


def build_sync_request(
    engine: PlacementEngine, department: Department, semester: int
) -> TimetableSyncRequest:
    records = [block_to_record(block) for block in engine.registry.list_assigned()]
    logger.debug(f"Prepared {len(records)} blocks for {department} semester {semester}")
    return TimetableSyncRequest(department=department, semester=semester, blocks=records)


def load_engine(
    rows: list[TimetableRow] | list[dict],
    grid: TimeGrid | None = None,
    settings: Settings | None = None,
) -> LoadResult:
    """Rebuild an engine from stored rows.

    Every row becomes a block. Rows that cannot be placed (period outside the
    day, running past the last period, or overlapping an earlier row) stay in
    the collection and are reported in ``skipped`` so the caller can surface
    them; the loaded grid therefore always satisfies the placement rules.
    """
    settings = settings or get_settings()
    grid = grid if grid is not None else TimeGrid()
    engine = PlacementEngine(grid=grid)
    skipped: list[MoveResult] = []

    parsed = [
        row if isinstance(row, TimetableRow) else TimetableRow.model_validate(row)
        for row in rows
    ]
    for row in sorted(parsed, key=lambda item: item.id):
        block = engine.create_block(
            row.subject_name,
            row.duration_periods * grid.reference_period_minutes,
            block_id=f"{settings.loaded_block_id_prefix}{row.id}",
        )
        try:
            result = engine.move_to_grid(block.id, row.day_of_week, row.period_number)
        except GridContractError as exc:
            logger.warning(f"Row {row.id} kept in collection: {exc}")
            result = MoveResult(
                ok=False,
                block_id=block.id,
                block=block,
                reason="boundary",
                message=str(exc),
            )
        if not result.ok:
            skipped.append(result)

    if skipped:
        logger.warning(f"{len(skipped)} of {len(parsed)} rows could not be placed")
    return LoadResult(engine=engine, skipped=skipped)
