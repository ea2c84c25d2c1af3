"""Block a vehicle across a range of dates, skipping occupied days."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta

from tourdesk.domain.records import BlockRecord, BookingRecord
from tourdesk.domain.run_state import resolve_run_state

DEFAULT_BLOCK_REASON = "Unavailable"


@dataclass(slots=True, frozen=True)
class BlockRangePlan:
    """Blocks to create and dates left alone because they carry bookings."""

    blocks: tuple[BlockRecord, ...] = ()
    skipped_dates: tuple[date, ...] = ()


@dataclass(slots=True)
class BlockRangeResult:
    """Aggregate outcome reported back to the caller."""

    success_count: int = 0
    skipped_dates: list[date] = field(default_factory=list)


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every calendar date in ``[start_date, end_date]``."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def plan_block_range(
    vehicle_id: str,
    start_date: date,
    end_date: date,
    reason: str | None,
    bookings: Iterable[BookingRecord] | None,
    *,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> BlockRangePlan:
    """Work out which days of the range can be blocked.

    Any active booking disqualifies a day, whatever its seats or type. Existing
    blocks are not consulted.
    """
    booking_list = tuple(bookings or ())
    block_reason = (reason or "").strip() or DEFAULT_BLOCK_REASON
    blocks: list[BlockRecord] = []
    skipped: list[date] = []
    for day in iter_dates(start_date, end_date):
        run = resolve_run_state(booking_list, day, vehicle_id)
        if run.active_bookings:
            skipped.append(day)
            continue
        blocks.append(
            BlockRecord(
                id=id_factory(),
                vehicle_id=vehicle_id,
                date=day,
                reason=block_reason,
            )
        )
    return BlockRangePlan(blocks=tuple(blocks), skipped_dates=tuple(skipped))


def block_range(
    vehicle_id: str,
    start_date: date,
    end_date: date,
    reason: str | None,
    bookings: Iterable[BookingRecord] | None,
    *,
    save_block: Callable[[BlockRecord], object],
) -> BlockRangeResult:
    """Persist one block per free day through ``save_block``.

    Days are independent: a failing save propagates and the days already
    saved stay saved.
    """
    plan = plan_block_range(vehicle_id, start_date, end_date, reason, bookings)
    result = BlockRangeResult(skipped_dates=list(plan.skipped_dates))
    for block in plan.blocks:
        save_block(block)
        result.success_count += 1
    return result
