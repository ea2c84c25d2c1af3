"""Build read-only engine snapshots from the database."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.core.settings import get_default_capacity
from tourdesk.domain.records import (
    BlockRecord,
    BookingRecord,
    RateRecord,
    RunSnapshot,
    VehicleRecord,
)
from tourdesk.models import Booking, Rate, Vehicle, VehicleBlock


def _coerce_utc(dt: datetime | None) -> datetime | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def booking_to_record(booking: Booking) -> BookingRecord:
    return BookingRecord(
        id=str(booking.id),
        date=booking.tour_date,
        vehicle_id=str(booking.vehicle_id),
        rate_type=booking.rate_type,
        seats=booking.seats,
        status=booking.status,
        tour_option_id=str(booking.tour_option_id) if booking.tour_option_id else None,
        guest_id=str(booking.guest_id) if booking.guest_id else None,
        pricing_mode=booking.pricing_mode,
        custom_price=booking.custom_price,
        total_price=booking.total_price,
        price_per_person=booking.price_per_person,
        private_price=booking.private_price,
        created_at=_coerce_utc(booking.created_at),
    )


def block_to_record(block: VehicleBlock) -> BlockRecord:
    return BlockRecord(
        id=str(block.id),
        vehicle_id=str(block.vehicle_id),
        date=block.block_date,
        reason=block.reason,
    )


def vehicle_to_record(vehicle: Vehicle) -> VehicleRecord:
    return VehicleRecord(
        id=str(vehicle.id),
        name=vehicle.name,
        seat_capacity=vehicle.seat_capacity,
        is_active=vehicle.is_active,
    )


def rate_to_record(rate: Rate) -> RateRecord:
    return RateRecord(
        tour_id=str(rate.tour_option_id),
        shared_price=rate.shared_price,
        private_price=rate.private_price,
        is_active=rate.is_active,
    )


async def list_rate_records(session: AsyncSession) -> list[RateRecord]:
    """Return the whole rate card as engine records."""
    result = await session.execute(select(Rate).order_by(Rate.created_at.asc()))
    return [rate_to_record(rate) for rate in result.scalars().all()]


async def load_snapshot(
    session: AsyncSession,
    *,
    start_date: date,
    end_date: date,
    vehicle_id: uuid.UUID | None = None,
) -> RunSnapshot:
    """Load every booking, block, vehicle and rate relevant to a date window.

    Bookings come back in creation order, which is what decides a run's type.
    """
    if start_date > end_date:
        raise ValueError("start_date must be before or equal to end_date")

    booking_stmt = (
        select(Booking)
        .where(Booking.tour_date >= start_date, Booking.tour_date <= end_date)
        .order_by(Booking.created_at.asc(), Booking.id.asc())
    )
    block_stmt = (
        select(VehicleBlock)
        .where(
            VehicleBlock.block_date >= start_date,
            VehicleBlock.block_date <= end_date,
        )
        .order_by(VehicleBlock.created_at.asc(), VehicleBlock.id.asc())
    )
    vehicle_stmt = select(Vehicle).order_by(Vehicle.created_at.asc())
    if vehicle_id is not None:
        booking_stmt = booking_stmt.where(Booking.vehicle_id == vehicle_id)
        block_stmt = block_stmt.where(VehicleBlock.vehicle_id == vehicle_id)
        vehicle_stmt = vehicle_stmt.where(Vehicle.id == vehicle_id)

    bookings = (await session.execute(booking_stmt)).scalars().all()
    blocks = (await session.execute(block_stmt)).scalars().all()
    vehicles = (await session.execute(vehicle_stmt)).scalars().all()

    return RunSnapshot(
        bookings=tuple(booking_to_record(b) for b in bookings),
        blocks=tuple(block_to_record(b) for b in blocks),
        vehicles=tuple(vehicle_to_record(v) for v in vehicles),
        rates=tuple(await list_rate_records(session)),
        default_capacity=get_default_capacity(),
    )
