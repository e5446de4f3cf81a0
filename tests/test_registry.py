"""Tests for block storage."""

import pytest
from pydantic import ValidationError

from periodgrid.errors import BlockNotFoundError, DuplicateBlockError
from periodgrid.models import Placement
from periodgrid.registry import BlockRegistry, duration_to_periods


@pytest.fixture
def registry():
    return BlockRegistry(reference_period_minutes=60)


@pytest.mark.parametrize(
    "minutes,periods",
    [(50, 1), (60, 1), (61, 2), (120, 2), (180, 3)],
)
def test_duration_rounds_up_to_whole_periods(minutes, periods):
    assert duration_to_periods(minutes, 60) == periods


def test_create_adds_unassigned_block(registry):
    block = registry.create("  Data Structures ", 120)
    assert block.label == "Data Structures"
    assert block.duration_minutes == 120
    assert block.duration_periods == 2
    assert block.placement is None
    assert registry.list_unassigned() == [block]
    assert registry.list_assigned() == []
    assert block.id in registry


def test_create_rejects_blank_label_and_bad_duration(registry):
    with pytest.raises(ValidationError):
        registry.create("   ", 60)
    with pytest.raises(ValueError):
        registry.create("Physics", 0)
    assert len(registry) == 0


def test_create_with_explicit_id_refuses_duplicates(registry):
    registry.create("Maths", 60, block_id="b-1")
    with pytest.raises(DuplicateBlockError):
        registry.create("Chemistry", 60, block_id="b-1")


def test_get_unknown_raises_not_found(registry):
    with pytest.raises(BlockNotFoundError) as exc_info:
        registry.get("missing")
    assert isinstance(exc_info.value, KeyError)
    assert exc_info.value.code == "BLOCK_NOT_FOUND"
    assert registry.find("missing") is None


def test_delete_is_idempotent(registry):
    block = registry.create("Maths", 60)
    assert registry.delete(block.id) is True
    assert registry.delete(block.id) is False
    assert registry.delete("never-existed") is False
    assert len(registry) == 0


def test_delete_removes_placed_block(registry):
    block = registry.create("Maths", 60)
    registry.place(block.id, Placement(day="Monday", start_period=1))
    assert registry.delete(block.id) is True
    assert registry.list_assigned("Monday") == []


def test_list_assigned_orders_by_day_then_period(registry):
    fri = registry.create("Friday talk", 60)
    mon_late = registry.create("Late", 60)
    mon_early = registry.create("Early", 60)
    registry.place(fri.id, Placement(day="Friday", start_period=1))
    registry.place(mon_late.id, Placement(day="Monday", start_period=5))
    registry.place(mon_early.id, Placement(day="Monday", start_period=2))

    assert [b.id for b in registry.list_assigned()] == [mon_early.id, mon_late.id, fri.id]
    assert [b.id for b in registry.list_assigned("Monday")] == [mon_early.id, mon_late.id]
    assert registry.list_assigned("Tuesday") == []


def test_unplaced_block_rejoins_collection_at_the_end(registry):
    first = registry.create("First", 60)
    second = registry.create("Second", 60)
    registry.place(first.id, Placement(day="Monday", start_period=1))
    registry.unplace(first.id)
    assert [b.id for b in registry.list_unassigned()] == [second.id, first.id]


def test_place_keeps_id_and_label(registry):
    block = registry.create("Maths", 120)
    placed = registry.place(block.id, Placement(day="Thursday", start_period=3))
    assert placed.id == block.id
    assert placed.label == block.label
    assert (placed.start_period, placed.end_period) == (3, 4)
    assert registry.get(block.id) == placed


def test_debug_log_on_create_and_delete(registry, log_records):
    block = registry.create("Maths", 60)
    registry.delete(block.id)
    messages = [r["message"] for r in log_records if r["level"].name == "DEBUG"]
    assert any("Created block" in m for m in messages)
    assert any("Deleted block" in m for m in messages)
