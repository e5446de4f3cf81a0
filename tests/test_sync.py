"""Tests for converting sessions to and from backend timetable rows."""

import pytest
from pydantic import ValidationError

from periodgrid.config import Settings
from periodgrid.errors import DuplicateBlockError
from periodgrid.sync import (
    SyncResponse,
    TimetableRow,
    TimetableSyncRequest,
    block_to_record,
    build_sync_request,
    load_engine,
)


def _row(row_id, day, period, subject, periods=1):
    return {
        "id": row_id,
        "department": "CT",
        "semester": 3,
        "day_of_week": day,
        "period_number": period,
        "subject_name": subject,
        "duration_periods": periods,
        "teacher_id": None,
    }


def test_sync_request_contains_only_placed_blocks(engine):
    lab = engine.create_block("DBMS Lab", 120)
    talk = engine.create_block("Seminar", 60)
    engine.create_block("Unplaced", 60)
    engine.move_to_grid(talk.id, "Friday", 1)
    engine.move_to_grid(lab.id, "Monday", 4)

    request = build_sync_request(engine, "CT", 3)
    assert isinstance(request, TimetableSyncRequest)
    assert request.model_dump(mode="json") == {
        "department": "CT",
        "semester": 3,
        "blocks": [
            {
                "day_of_week": "Monday",
                "period_number": 4,
                "subject_name": "DBMS Lab",
                "duration_periods": 2,
                "teacher_id": None,
            },
            {
                "day_of_week": "Friday",
                "period_number": 1,
                "subject_name": "Seminar",
                "duration_periods": 1,
                "teacher_id": None,
            },
        ],
    }


def test_unplaced_block_cannot_become_a_record(engine):
    block = engine.create_block("Unplaced", 60)
    with pytest.raises(ValueError):
        block_to_record(block)


def test_sync_request_validates_department_and_semester(engine):
    with pytest.raises(ValidationError):
        build_sync_request(engine, "ARTS", 3)
    with pytest.raises(ValidationError):
        build_sync_request(engine, "EC", 9)


def test_load_rebuilds_placements_with_prefixed_ids():
    rows = [_row(7, "Tuesday", 2, "Compilers", periods=2), _row(3, "Friday", 6, "Ethics")]
    loaded = load_engine(rows, settings=Settings())
    assert loaded.skipped == []

    registry = loaded.engine.registry
    compilers = registry.get("db-7")
    assert compilers.label == "Compilers"
    assert compilers.duration_minutes == 120
    assert compilers.duration_periods == 2
    assert (compilers.placement.day, compilers.start_period, compilers.end_period) == ("Tuesday", 2, 3)
    assert registry.get("db-3").placement.day == "Friday"
    assert registry.list_unassigned() == []


def test_load_keeps_conflicting_rows_in_collection(log_records):
    rows = [
        _row(1, "Monday", 1, "Algorithms", periods=2),
        _row(2, "Monday", 2, "Networks"),
        _row(3, "Monday", 6, "Overflow", periods=2),
        _row(4, "Wednesday", 9, "Nowhere"),
    ]
    loaded = load_engine([TimetableRow.model_validate(row) for row in rows])

    assert [r.block_id for r in loaded.skipped] == ["db-2", "db-3", "db-4"]
    assert [r.reason for r in loaded.skipped] == ["overlap", "boundary", "boundary"]
    assert loaded.skipped[0].conflicting_block_id == "db-1"
    assert [b.id for b in loaded.engine.registry.list_unassigned()] == ["db-2", "db-3", "db-4"]
    assert any(r["level"].name == "WARNING" and "could not be placed" in r["message"] for r in log_records)


def test_load_honours_id_prefix_setting(monkeypatch):
    monkeypatch.setenv("PERIODGRID_LOADED_BLOCK_ID_PREFIX", "row-")
    loaded = load_engine([_row(5, "Thursday", 3, "Graphics")])
    assert "row-5" in loaded.engine.registry


def test_load_rejects_duplicate_row_ids():
    with pytest.raises(DuplicateBlockError):
        load_engine([_row(1, "Monday", 1, "A"), _row(1, "Tuesday", 1, "B")])


def test_round_trip_through_rows(engine):
    a = engine.create_block("Algorithms", 180)
    engine.move_to_grid(a.id, "Wednesday", 4)
    request = build_sync_request(engine, "MECH", 5)

    rows = [
        {"id": n, "department": "MECH", "semester": 5, **record.model_dump()}
        for n, record in enumerate(request.blocks, start=1)
    ]
    reloaded = load_engine(rows)
    assert build_sync_request(reloaded.engine, "MECH", 5) == request


def test_sync_response_parses_backend_payload():
    response = SyncResponse.model_validate(
        {"success": True, "message": "Timetable synced", "deleted": 4, "inserted": 5, "total": 5, "extra": 1}
    )
    assert response.success
    assert response.inserted == 5
