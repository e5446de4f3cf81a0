from __future__ import annotations

from datetime import time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
WEEKDAYS: tuple[Weekday, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

SegmentKind = Literal["period", "break", "lunch", "padding"]
RejectionReason = Literal["boundary", "overlap", "not_found", "not_assigned"]


def weekday_index(day: Weekday) -> int:
    return WEEKDAYS.index(day)


class PeriodSegment(BaseModel):
    """One column group of a day's layout: a schedulable period or a gap."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str = Field(max_length=40)
    start_time: time
    span_units: int = Field(gt=0)
    kind: SegmentKind = "period"
    period_number: int | None = Field(default=None, ge=1)

    @property
    def is_schedulable(self) -> bool:
        return self.kind == "period"

    @model_validator(mode="after")
    def validate_period_number(self) -> PeriodSegment:
        if self.start_time.second or self.start_time.microsecond:
            msg = f"Segment '{self.label}' must start on a whole minute"
            raise ValueError(msg)
        if self.is_schedulable and self.period_number is None:
            msg = f"Schedulable segment '{self.label}' needs a period_number"
            raise ValueError(msg)
        if not self.is_schedulable and self.period_number is not None:
            msg = f"Non-schedulable segment '{self.label}' cannot carry a period_number"
            raise ValueError(msg)
        return self


class Placement(BaseModel):
    """Assignment of a block to the grid."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    day: Weekday
    start_period: int = Field(ge=1)


class Block(BaseModel):
    """Schedulable unit of work; unassigned while ``placement`` is None."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1, max_length=120)
    label: str = Field(min_length=1, max_length=120)
    duration_minutes: int = Field(gt=0)
    duration_periods: int = Field(ge=1)
    placement: Placement | None = None

    @property
    def is_assigned(self) -> bool:
        return self.placement is not None

    @property
    def start_period(self) -> int | None:
        return self.placement.start_period if self.placement else None

    @property
    def end_period(self) -> int | None:
        if self.placement is None:
            return None
        return self.placement.start_period + self.duration_periods - 1


class PlacementCheck(BaseModel):
    """Outcome of a placement validation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ok: bool
    reason: RejectionReason | None = None
    conflicting_block_id: str | None = None
    conflicting_label: str | None = None

    @classmethod
    def accepted(cls) -> PlacementCheck:
        return cls(ok=True)

    @classmethod
    def rejected(
        cls,
        reason: RejectionReason,
        conflicting: Block | None = None,
    ) -> PlacementCheck:
        return cls(
            ok=False,
            reason=reason,
            conflicting_block_id=conflicting.id if conflicting else None,
            conflicting_label=conflicting.label if conflicting else None,
        )


class MoveResult(BaseModel):
    """What the engine reports back after a move command."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ok: bool
    block_id: str
    block: Block | None = None
    reason: RejectionReason | None = None
    conflicting_block_id: str | None = None
    conflicting_label: str | None = None
    message: str | None = None


class GridSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    assigned: list[Block]
    unassigned: list[Block]
