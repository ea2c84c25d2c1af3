"""Tests for range blocking."""

from __future__ import annotations

from datetime import date

import pytest

from tourdesk.domain import (
    BlockRecord,
    BookingRecord,
    BookingStatus,
    RateType,
    block_range,
    plan_block_range,
)


def _booking(day: date, status: BookingStatus = BookingStatus.CONFIRMED) -> BookingRecord:
    return BookingRecord(
        id=f"b-{day.isoformat()}",
        date=day,
        vehicle_id="jeep-1",
        rate_type=RateType.SHARED,
        seats=1,
        status=status,
    )


def test_occupied_days_are_skipped() -> None:
    saved: list[BlockRecord] = []

    result = block_range(
        "jeep-1",
        date(2024, 6, 1),
        date(2024, 6, 3),
        "maintenance",
        [_booking(date(2024, 6, 2))],
        save_block=saved.append,
    )

    assert result.success_count == 2
    assert result.skipped_dates == [date(2024, 6, 2)]
    assert [block.date for block in saved] == [date(2024, 6, 1), date(2024, 6, 3)]
    assert {block.reason for block in saved} == {"maintenance"}
    assert len({block.id for block in saved}) == 2


def test_cancelled_bookings_do_not_prevent_blocking() -> None:
    plan = plan_block_range(
        "jeep-1",
        date(2024, 6, 1),
        date(2024, 6, 1),
        None,
        [_booking(date(2024, 6, 1), status=BookingStatus.CANCELLED)],
    )

    assert len(plan.blocks) == 1
    assert plan.blocks[0].reason == "Unavailable"
    assert plan.skipped_dates == ()


def test_other_vehicles_bookings_are_ignored() -> None:
    plan = plan_block_range(
        "jeep-2", date(2024, 6, 2), date(2024, 6, 2), "  ", [_booking(date(2024, 6, 2))]
    )

    assert [block.vehicle_id for block in plan.blocks] == ["jeep-2"]
    assert plan.blocks[0].reason == "Unavailable"


def test_inverted_range_blocks_nothing() -> None:
    plan = plan_block_range("jeep-1", date(2024, 6, 3), date(2024, 6, 1), "x", [])

    assert plan.blocks == ()
    assert plan.skipped_dates == ()


def test_save_failure_propagates_after_earlier_days() -> None:
    saved: list[BlockRecord] = []

    def save(block: BlockRecord) -> None:
        if block.date == date(2024, 6, 2):
            raise RuntimeError("storage down")
        saved.append(block)

    with pytest.raises(RuntimeError):
        block_range(
            "jeep-1", date(2024, 6, 1), date(2024, 6, 3), "x", [], save_block=save
        )

    assert [block.date for block in saved] == [date(2024, 6, 1)]
