"""Derive the live state of a tour run from bookings and vehicle blocks."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, date, datetime

from tourdesk.domain.records import (
    DEFAULT_SEAT_CAPACITY,
    BlockRecord,
    BookingRecord,
    RunSnapshot,
    RunType,
    TourRun,
    make_tour_run_id,
)


def find_block(
    blocks: Iterable[BlockRecord] | None, run_date: date, vehicle_id: str
) -> BlockRecord | None:
    """Return the first block covering the vehicle on the date."""
    for block in blocks or ():
        if block.vehicle_id == vehicle_id and block.date == run_date:
            return block
    return None


def _utc(moment: datetime) -> datetime:
    # Naive timestamps are read as UTC so mixed inputs stay comparable.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def _creation_order(bookings: list[BookingRecord]) -> list[BookingRecord]:
    # Untimestamped bookings keep the caller's order, after timestamped ones.
    if all(booking.created_at is None for booking in bookings):
        return bookings
    timestamped = [b for b in bookings if b.created_at is not None]
    undated = [b for b in bookings if b.created_at is None]
    return sorted(timestamped, key=lambda b: _utc(b.created_at)) + undated


def resolve_run_state(
    bookings: Iterable[BookingRecord] | None,
    run_date: date,
    vehicle_id: str,
    exclude_booking_id: str | None = None,
    seat_capacity: int = DEFAULT_SEAT_CAPACITY,
    blocks: Iterable[BlockRecord] | None = None,
) -> TourRun:
    """Resolve one (vehicle, date) run.

    A block short-circuits everything else. Otherwise the run type and tour
    option come from the earliest active booking, cancelled bookings and the
    booking under edit (``exclude_booking_id``) are ignored, and a private run
    is always full.
    """
    run_id = make_tour_run_id(run_date, vehicle_id)

    block = find_block(blocks, run_date, vehicle_id)
    if block is not None:
        return TourRun(
            id=run_id,
            date=run_date,
            vehicle_id=vehicle_id,
            type=RunType.BLOCKED,
            tour_option_id=None,
            occupied_seats=seat_capacity,
            seats_remaining=0,
            is_full=True,
            is_blocked=True,
            block_reason=block.reason,
            block_id=block.id,
        )

    run_bookings = [b for b in bookings or () if b.tour_run_id == run_id]
    active = [b for b in run_bookings if b.is_active]
    if exclude_booking_id is not None:
        active = [b for b in active if b.id != exclude_booking_id]
    active = _creation_order(active)

    first = active[0] if active else None
    run_type = RunType(first.rate_type) if first is not None else None
    tour_option_id = first.tour_option_id if first is not None else None
    occupied = sum(b.seats for b in active)

    if run_type is RunType.SHARED:
        remaining = seat_capacity - occupied
    elif run_type is RunType.PRIVATE:
        remaining = 0
    else:
        remaining = seat_capacity

    is_full = run_type is RunType.PRIVATE or (
        run_type is RunType.SHARED and occupied >= seat_capacity
    )

    return TourRun(
        id=run_id,
        date=run_date,
        vehicle_id=vehicle_id,
        type=run_type,
        tour_option_id=tour_option_id,
        occupied_seats=occupied,
        seats_remaining=remaining,
        active_bookings=tuple(active),
        all_bookings=tuple(run_bookings),
        is_full=is_full,
        is_blocked=False,
    )


def resolve_from_snapshot(
    snapshot: RunSnapshot,
    run_date: date,
    vehicle_id: str,
    *,
    exclude_booking_id: str | None = None,
) -> TourRun:
    """Resolve a run using the vehicle capacity recorded in the snapshot."""
    return resolve_run_state(
        snapshot.bookings,
        run_date,
        vehicle_id,
        exclude_booking_id=exclude_booking_id,
        seat_capacity=snapshot.seat_capacity(vehicle_id),
        blocks=snapshot.blocks,
    )
