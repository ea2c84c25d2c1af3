"""Vehicles, tour options and the rate card."""
from __future__ import annotations

import uuid
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.models import Rate, TourOption, Vehicle
from tourdesk.services.errors import NotFoundError


async def list_vehicles(
    session: AsyncSession, *, active_only: bool = False
) -> Sequence[Vehicle]:
    """Return vehicles in the order they were added to the fleet."""
    stmt = select(Vehicle).order_by(Vehicle.created_at.asc(), Vehicle.name.asc())
    if active_only:
        stmt = stmt.where(Vehicle.is_active.is_(True))
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_vehicle(session: AsyncSession, *, vehicle_id: uuid.UUID) -> Vehicle:
    vehicle = await session.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    return vehicle


async def create_vehicle(
    session: AsyncSession,
    *,
    name: str,
    seat_capacity: int,
    driver_name: str | None = None,
    is_active: bool = True,
) -> Vehicle:
    if seat_capacity < 1:
        raise ValueError("Seat capacity must be at least 1")
    vehicle = Vehicle(
        name=name,
        seat_capacity=seat_capacity,
        driver_name=driver_name,
        is_active=is_active,
    )
    session.add(vehicle)
    await session.commit()
    await session.refresh(vehicle)
    return vehicle


async def update_vehicle(
    session: AsyncSession,
    *,
    vehicle: Vehicle,
    name: str | None = None,
    seat_capacity: int | None = None,
    driver_name: str | None = None,
    is_active: bool | None = None,
) -> Vehicle:
    """Update a vehicle.

    Lowering capacity never invalidates bookings already made; it only affects
    the next evaluation of each run.
    """
    if name is not None:
        vehicle.name = name
    if seat_capacity is not None:
        if seat_capacity < 1:
            raise ValueError("Seat capacity must be at least 1")
        vehicle.seat_capacity = seat_capacity
    if driver_name is not None:
        vehicle.driver_name = driver_name
    if is_active is not None:
        vehicle.is_active = is_active
    await session.commit()
    await session.refresh(vehicle)
    return vehicle


async def list_tour_options(session: AsyncSession) -> Sequence[TourOption]:
    result = await session.execute(select(TourOption).order_by(TourOption.name.asc()))
    return result.scalars().all()


async def get_tour_option(
    session: AsyncSession, *, tour_option_id: uuid.UUID
) -> TourOption:
    tour_option = await session.get(TourOption, tour_option_id)
    if tour_option is None:
        raise NotFoundError("Tour option not found")
    return tour_option


async def create_tour_option(
    session: AsyncSession,
    *,
    name: str,
    color: str | None = None,
    is_active: bool = True,
) -> TourOption:
    tour_option = TourOption(name=name, color=color, is_active=is_active)
    session.add(tour_option)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(tour_option)
    return tour_option


async def list_rates(session: AsyncSession) -> Sequence[Rate]:
    result = await session.execute(select(Rate).order_by(Rate.created_at.asc()))
    return result.scalars().all()


async def get_rate(session: AsyncSession, *, rate_id: uuid.UUID) -> Rate:
    rate = await session.get(Rate, rate_id)
    if rate is None:
        raise NotFoundError("Rate not found")
    return rate


async def create_rate(
    session: AsyncSession,
    *,
    tour_option_id: uuid.UUID,
    shared_price: Decimal | None,
    private_price: Decimal | None,
    is_active: bool = True,
) -> Rate:
    await get_tour_option(session, tour_option_id=tour_option_id)
    rate = Rate(
        tour_option_id=tour_option_id,
        shared_price=shared_price,
        private_price=private_price,
        is_active=is_active,
    )
    session.add(rate)
    await session.commit()
    await session.refresh(rate)
    return rate


async def update_rate(
    session: AsyncSession,
    *,
    rate: Rate,
    shared_price: Decimal | None = None,
    private_price: Decimal | None = None,
    is_active: bool | None = None,
) -> Rate:
    if shared_price is not None:
        rate.shared_price = shared_price
    if private_price is not None:
        rate.private_price = private_price
    if is_active is not None:
        rate.is_active = is_active
    await session.commit()
    await session.refresh(rate)
    return rate
