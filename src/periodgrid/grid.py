from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, time, timedelta

from .errors import (
    InvalidLayoutError,
    InvalidPeriodError,
    NotASlotBoundaryError,
    UnknownDayError,
)
from .models import WEEKDAYS, PeriodSegment, Weekday

STANDARD_SEGMENTS: tuple[PeriodSegment, ...] = (
    PeriodSegment(label="P1", start_time="09:20", span_units=6, period_number=1),
    PeriodSegment(label="P2", start_time="10:20", span_units=6, period_number=2),
    PeriodSegment(label="Break", start_time="11:20", span_units=2, kind="break"),
    PeriodSegment(label="P3", start_time="11:40", span_units=6, period_number=3),
    PeriodSegment(label="Lunch", start_time="12:40", span_units=4, kind="lunch"),
    PeriodSegment(label="P4", start_time="13:20", span_units=6, period_number=4),
    PeriodSegment(label="P5", start_time="14:20", span_units=6, period_number=5),
    PeriodSegment(label="P6", start_time="15:20", span_units=6, period_number=6),
    PeriodSegment(label="", start_time="16:20", span_units=1, kind="padding"),
)

# Friday: extended lunch, 50 minute afternoon periods.
COMPRESSED_SEGMENTS: tuple[PeriodSegment, ...] = (
    PeriodSegment(label="P1", start_time="09:20", span_units=6, period_number=1),
    PeriodSegment(label="P2", start_time="10:20", span_units=6, period_number=2),
    PeriodSegment(label="Break", start_time="11:20", span_units=2, kind="break"),
    PeriodSegment(label="P3", start_time="11:40", span_units=6, period_number=3),
    PeriodSegment(label="Lunch", start_time="12:40", span_units=8, kind="lunch"),
    PeriodSegment(label="P4", start_time="14:00", span_units=5, period_number=4),
    PeriodSegment(label="P5", start_time="14:50", span_units=5, period_number=5),
    PeriodSegment(label="P6", start_time="15:40", span_units=5, period_number=6),
)

DEFAULT_LAYOUTS: dict[str, tuple[PeriodSegment, ...]] = {
    "standard": STANDARD_SEGMENTS,
    "compressed": COMPRESSED_SEGMENTS,
}

DEFAULT_DAY_LAYOUTS: dict[Weekday, str] = {
    "Monday": "standard",
    "Tuesday": "standard",
    "Wednesday": "standard",
    "Thursday": "standard",
    "Friday": "compressed",
}


def parse_clock(value: time | str) -> time:
    """Accept a ``time`` or an ``HH:MM`` string."""
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        msg = f"'{value}' is not a HH:MM clock time"
        raise NotASlotBoundaryError(msg) from exc


def _add_minutes(value: time, minutes: int) -> time:
    return (datetime.combine(datetime.min, value) + timedelta(minutes=minutes)).time()


def _minutes_between(start: time, end: time) -> int:
    return (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)


class TimeGrid:
    """Weekly period layout; read-only reference data for placement checks.

    Each weekday maps to a named layout, an ordered tuple of segments. Layout
    tables are checked when the grid is built: segments are contiguous, labels
    are unique within a day and period numbers run 1..N in start-time order.
    """

    def __init__(
        self,
        layouts: Mapping[str, Sequence[PeriodSegment]] | None = None,
        day_layouts: Mapping[Weekday, str] | None = None,
        unit_minutes: int = 10,
    ) -> None:
        if unit_minutes <= 0:
            msg = f"unit_minutes must be positive, got {unit_minutes}"
            raise InvalidLayoutError(msg)
        self.unit_minutes = unit_minutes

        layouts = DEFAULT_LAYOUTS if layouts is None else layouts
        day_layouts = DEFAULT_DAY_LAYOUTS if day_layouts is None else day_layouts

        self._layouts: dict[str, tuple[PeriodSegment, ...]] = {}
        for name, segments in layouts.items():
            self._layouts[name] = self._checked_layout(name, tuple(segments))

        self._day_layouts: dict[Weekday, str] = {}
        for day in WEEKDAYS:
            name = day_layouts.get(day)
            if name is None or name not in self._layouts:
                msg = f"No layout defined for {day} (got {name!r})"
                raise InvalidLayoutError(msg)
            self._day_layouts[day] = name

        self._period_index: dict[str, dict[int, PeriodSegment]] = {
            name: {
                seg.period_number: seg
                for seg in segments
                if seg.period_number is not None
            }
            for name, segments in self._layouts.items()
        }

    def _checked_layout(
        self, name: str, segments: tuple[PeriodSegment, ...]
    ) -> tuple[PeriodSegment, ...]:
        if not segments:
            msg = f"Layout '{name}' has no segments"
            raise InvalidLayoutError(msg)

        labels = [seg.label for seg in segments if seg.label]
        if len(labels) != len(set(labels)):
            msg = f"Layout '{name}' repeats a segment label"
            raise InvalidLayoutError(msg)

        for prev, curr in zip(segments, segments[1:]):
            expected = self.end_time(prev)
            if curr.start_time != expected:
                msg = (
                    f"Layout '{name}': segment '{curr.label}' starts at "
                    f"{curr.start_time:%H:%M}, expected {expected:%H:%M}"
                )
                raise InvalidLayoutError(msg)

        numbers = [seg.period_number for seg in segments if seg.is_schedulable]
        if not numbers:
            msg = f"Layout '{name}' has no schedulable periods"
            raise InvalidLayoutError(msg)
        if numbers != list(range(1, len(numbers) + 1)):
            msg = f"Layout '{name}' must number its periods 1..N in order, got {numbers}"
            raise InvalidLayoutError(msg)
        return segments

    def layout_name(self, day: Weekday) -> str:
        try:
            return self._day_layouts[day]
        except KeyError:
            msg = f"{day!r} is not a weekday of the grid"
            raise UnknownDayError(msg) from None

    def _periods(self, day: Weekday) -> dict[int, PeriodSegment]:
        return self._period_index[self.layout_name(day)]

    def segments_for(self, day: Weekday) -> tuple[PeriodSegment, ...]:
        return self._layouts[self.layout_name(day)]

    def schedulable_segments(self, day: Weekday) -> list[PeriodSegment]:
        return [seg for seg in self.segments_for(day) if seg.is_schedulable]

    def max_period(self, day: Weekday) -> int:
        return max(self._periods(day))

    def period_number(self, day: Weekday, start_time: time | str) -> int:
        """Period number of the schedulable segment starting at ``start_time``.

        Raises:
            NotASlotBoundaryError: no schedulable segment starts at that time
        """
        clock = parse_clock(start_time)
        for seg in self.segments_for(day):
            if seg.is_schedulable and seg.start_time == clock:
                return seg.period_number
        msg = f"{clock:%H:%M} is not the start of a period on {day}"
        raise NotASlotBoundaryError(msg)

    def segment_for_period(self, day: Weekday, period_number: int) -> PeriodSegment:
        segment = self._periods(day).get(period_number)
        if segment is None:
            msg = (
                f"Period {period_number} is outside 1..{self.max_period(day)} on {day}"
            )
            raise InvalidPeriodError(msg)
        return segment

    def start_time_for_period(self, day: Weekday, period_number: int) -> time:
        return self.segment_for_period(day, period_number).start_time

    def end_time(self, segment: PeriodSegment) -> time:
        return _add_minutes(segment.start_time, segment.span_units * self.unit_minutes)

    def segment_minutes(self, segment: PeriodSegment) -> int:
        return segment.span_units * self.unit_minutes

    def period_length_minutes(self, day: Weekday) -> int:
        """Length of the shortest period of the day."""
        return min(self.segment_minutes(seg) for seg in self.schedulable_segments(day))

    @property
    def reference_period_minutes(self) -> int:
        """Period length used to turn a duration in minutes into periods.

        Taken from Monday's layout, the standard day.
        """
        return self.period_length_minutes(WEEKDAYS[0])

    def column_count(self, day: Weekday) -> int:
        return sum(seg.span_units for seg in self.segments_for(day))

    def day_span_minutes(self, day: Weekday) -> int:
        segments = self.segments_for(day)
        return _minutes_between(segments[0].start_time, self.end_time(segments[-1]))

    def time_range_label(self, segment: PeriodSegment) -> str:
        return f"{segment.start_time:%H:%M} - {self.end_time(segment):%H:%M}"
