from .config import Settings, get_settings
from .engine import PlacementEngine
from .errors import (
    BlockNotFoundError,
    DuplicateBlockError,
    GridContractError,
    InvalidLayoutError,
    InvalidPeriodError,
    NotASlotBoundaryError,
    UnknownDayError,
)
from .grid import TimeGrid
from .models import (
    WEEKDAYS,
    Block,
    GridSnapshot,
    MoveResult,
    PeriodSegment,
    Placement,
    PlacementCheck,
    Weekday,
)
from .palette import SubjectPalette
from .registry import BlockRegistry
from .sync import (
    TimetableBlockRecord,
    TimetableRow,
    TimetableSyncRequest,
    build_sync_request,
    load_engine,
)
from .validator import PlacementValidator

__all__ = [
    "WEEKDAYS",
    "Block",
    "BlockNotFoundError",
    "BlockRegistry",
    "DuplicateBlockError",
    "GridContractError",
    "GridSnapshot",
    "InvalidLayoutError",
    "InvalidPeriodError",
    "MoveResult",
    "NotASlotBoundaryError",
    "PeriodSegment",
    "Placement",
    "PlacementCheck",
    "PlacementEngine",
    "PlacementValidator",
    "Settings",
    "SubjectPalette",
    "TimeGrid",
    "TimetableBlockRecord",
    "TimetableRow",
    "TimetableSyncRequest",
    "UnknownDayError",
    "Weekday",
    "build_sync_request",
    "get_settings",
    "load_engine",
]


def main() -> None:
    from .logger import setup_logger

    settings = get_settings()
    setup_logger(level=settings.log_level, log_file=settings.log_file)

    grid = TimeGrid()
    for day in WEEKDAYS:
        print(
            f"{day} ({grid.layout_name(day)}, {grid.max_period(day)} periods, "
            f"{grid.day_span_minutes(day)} min)"
        )
        for segment in grid.segments_for(day):
            name = segment.label or "-"
            print(f"  {name:<6} {grid.time_range_label(segment)}")
