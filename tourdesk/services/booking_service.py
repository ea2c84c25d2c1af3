"""Booking management service helpers."""
from __future__ import annotations

import logging
import secrets
import uuid
from collections.abc import Sequence
from dataclasses import replace
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tourdesk.core.settings import get_fallback_prices
from tourdesk.domain.admission import AdmissionRequest
from tourdesk.domain.pricing import calculate_total
from tourdesk.domain.records import (
    BookingStatus,
    PaymentStatus,
    PricingMode,
    RateType,
)
from tourdesk.domain.run_state import resolve_from_snapshot
from tourdesk.domain.validation import BookingDraft, validate_booking
from tourdesk.models import Booking, Guest, Vehicle
from tourdesk.services import (
    fleet_service,
    guest_service,
    reference_service,
    snapshot_service,
)
from tourdesk.services.errors import (
    AdmissionRejected,
    BookingValidationError,
    NotFoundError,
)
from tourdesk.services.run_locks import AdmissionTransaction, get_admission_transaction
from tourdesk.services.run_service import evaluate_admission

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.TENTATIVE: {
        BookingStatus.CONFIRMED,
        BookingStatus.DONE,
        BookingStatus.CANCELLED,
    },
    BookingStatus.CONFIRMED: {
        BookingStatus.TENTATIVE,
        BookingStatus.DONE,
        BookingStatus.CANCELLED,
    },
    BookingStatus.DONE: set(),
    BookingStatus.CANCELLED: {BookingStatus.TENTATIVE, BookingStatus.CONFIRMED},
}


def _new_booking_ref() -> str:
    return f"TD-{secrets.token_hex(4).upper()}"


def _base_booking_query():
    return select(Booking).options(
        selectinload(Booking.guest),
        selectinload(Booking.vehicle),
        selectinload(Booking.tour_option),
        selectinload(Booking.market_source),
        selectinload(Booking.agent),
    )


async def list_bookings(
    session: AsyncSession,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    vehicle_id: uuid.UUID | None = None,
    status: BookingStatus | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Booking]:
    stmt = _base_booking_query().order_by(
        Booking.tour_date.asc(), Booking.created_at.asc()
    )
    if start_date is not None:
        stmt = stmt.where(Booking.tour_date >= start_date)
    if end_date is not None:
        stmt = stmt.where(Booking.tour_date <= end_date)
    if vehicle_id is not None:
        stmt = stmt.where(Booking.vehicle_id == vehicle_id)
    if status is not None:
        stmt = stmt.where(Booking.status == status)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().unique().all()


async def get_booking(session: AsyncSession, *, booking_id: uuid.UUID) -> Booking:
    result = await session.execute(
        _base_booking_query()
        .where(Booking.id == booking_id)
        .execution_options(populate_existing=True)
    )
    booking = result.scalars().unique().one_or_none()
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


def _validate_status_transition(current: BookingStatus, target: BookingStatus) -> None:
    if target == current:
        return
    if target not in _ALLOWED_STATUS_TRANSITIONS.get(current, set()):
        raise ValueError(f"Invalid status transition from {current.value} to {target.value}")


def _ensure_valid(
    guest: Guest,
    *,
    tour_date: date,
    tour_option_id: uuid.UUID | None,
    seats: int,
    pickup_location: str | None,
    pickup_time: str | None,
    market_source_id: uuid.UUID | None,
    status: BookingStatus,
    payment_status: PaymentStatus,
    seat_capacity: int,
) -> None:
    draft = BookingDraft(
        first_name=guest.first_name,
        surname=guest.surname,
        phone=guest.phone,
        email=guest.email,
        date=tour_date,
        tour_option_id=str(tour_option_id) if tour_option_id else None,
        seats=seats,
        pickup_location=pickup_location,
        pickup_time=pickup_time,
        market_source_id=str(market_source_id) if market_source_id else None,
        status=status.value,
        payment_status=payment_status.value,
    )
    result = validate_booking(draft, seat_capacity)
    if not result.is_valid:
        raise BookingValidationError(result.errors)


async def _check_attribution(
    session: AsyncSession,
    *,
    market_source_id: uuid.UUID | None,
    agent_id: uuid.UUID | None,
) -> None:
    # Only newly chosen sources and agents must be active.
    if market_source_id is not None:
        source = await reference_service.get_market_source(
            session, market_source_id=market_source_id
        )
        if not source.is_active:
            raise ValueError("Market source is not active")
    if agent_id is not None:
        agent = await reference_service.get_agent(session, agent_id=agent_id)
        if not agent.is_active:
            raise ValueError("Agent is not active")


async def _priced_total(session: AsyncSession, booking: Booking) -> Decimal:
    """Resolve the total to store, ignoring any total stored before."""
    record = replace(snapshot_service.booking_to_record(booking), total_price=None)
    rates = await snapshot_service.list_rate_records(session)
    return calculate_total(record, rates, fallback=get_fallback_prices())


async def _lock_vehicle(session: AsyncSession, vehicle_id: uuid.UUID) -> Vehicle:
    # Row lock on databases that support it; SQLite ignores FOR UPDATE.
    result = await session.execute(
        select(Vehicle).where(Vehicle.id == vehicle_id).with_for_update()
    )
    vehicle = result.scalar_one_or_none()
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    return vehicle


async def _admit(
    session: AsyncSession,
    *,
    vehicle: Vehicle,
    tour_date: date,
    request: AdmissionRequest,
    exclude_booking_id: uuid.UUID | None,
) -> None:
    """Raise ``AdmissionRejected`` unless the run can take the request."""
    snapshot = await snapshot_service.load_snapshot(
        session, start_date=tour_date, end_date=tour_date, vehicle_id=vehicle.id
    )
    run = resolve_from_snapshot(
        snapshot,
        tour_date,
        str(vehicle.id),
        exclude_booking_id=str(exclude_booking_id) if exclude_booking_id else None,
    )
    decision = evaluate_admission(run, request, vehicle.seat_capacity)
    if not decision.allowed:
        raise AdmissionRejected(decision)


async def create_booking(
    session: AsyncSession,
    *,
    guest_id: uuid.UUID,
    vehicle_id: uuid.UUID,
    tour_date: date,
    rate_type: RateType,
    seats: int,
    pickup_location: str,
    pickup_time: str,
    market_source_id: uuid.UUID | None,
    market_source_detail: str | None = None,
    agent_id: uuid.UUID | None = None,
    tour_option_id: uuid.UUID | None = None,
    status: BookingStatus = BookingStatus.TENTATIVE,
    payment_status: PaymentStatus = PaymentStatus.PENDING,
    pricing_mode: PricingMode = PricingMode.STANDARD,
    custom_price: Decimal | None = None,
    total_price: Decimal | None = None,
    price_per_person: Decimal | None = None,
    private_price: Decimal | None = None,
    notes: str | None = None,
    reminder_date: date | None = None,
    reminder_text: str | None = None,
    admission: AdmissionTransaction | None = None,
) -> Booking:
    """Create a booking and store its resolved total.

    A ``total_price`` given by the caller is kept as-is; otherwise the total is
    resolved now so later rate card edits do not reprice the booking.
    """
    guest = await guest_service.get_guest(session, guest_id=guest_id)
    vehicle = await fleet_service.get_vehicle(session, vehicle_id=vehicle_id)
    if not vehicle.is_active:
        raise ValueError("Vehicle is not active")
    if tour_option_id is not None:
        await fleet_service.get_tour_option(session, tour_option_id=tour_option_id)
    _ensure_valid(
        guest,
        tour_date=tour_date,
        tour_option_id=tour_option_id,
        seats=seats,
        pickup_location=pickup_location,
        pickup_time=pickup_time,
        market_source_id=market_source_id,
        status=status,
        payment_status=payment_status,
        seat_capacity=vehicle.seat_capacity,
    )
    await _check_attribution(
        session, market_source_id=market_source_id, agent_id=agent_id
    )

    booking = Booking(
        id=uuid.uuid4(),
        booking_ref=_new_booking_ref(),
        guest_id=guest.id,
        vehicle_id=vehicle.id,
        tour_option_id=tour_option_id,
        tour_date=tour_date,
        rate_type=rate_type,
        seats=seats,
        status=status,
        payment_status=payment_status,
        pricing_mode=pricing_mode,
        custom_price=custom_price,
        total_price=total_price,
        price_per_person=price_per_person,
        private_price=private_price,
        pickup_location=pickup_location,
        pickup_time=pickup_time,
        market_source_id=market_source_id,
        market_source_detail=market_source_detail,
        agent_id=agent_id,
        notes=notes,
        reminder_date=reminder_date,
        reminder_text=reminder_text,
    )
    if total_price is None:
        booking.total_price = await _priced_total(session, booking)

    transaction = admission or get_admission_transaction()
    async with transaction.run_scope(str(vehicle.id), tour_date):
        if status != BookingStatus.CANCELLED:
            locked = await _lock_vehicle(session, vehicle.id)
            await _admit(
                session,
                vehicle=locked,
                tour_date=tour_date,
                request=AdmissionRequest(
                    rate_type=rate_type,
                    tour_option_id=str(tour_option_id) if tour_option_id else None,
                    seats=seats,
                ),
                exclude_booking_id=None,
            )
        session.add(booking)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise

    logger.info("Booking %s created on run %s", booking.booking_ref, booking.tour_run_id)
    return await get_booking(session, booking_id=booking.id)


def _pick(value, current):
    return value if value is not None else current


async def update_booking(
    session: AsyncSession,
    *,
    booking: Booking,
    guest_id: uuid.UUID | None = None,
    vehicle_id: uuid.UUID | None = None,
    tour_date: date | None = None,
    tour_option_id: uuid.UUID | None = None,
    rate_type: RateType | None = None,
    seats: int | None = None,
    status: BookingStatus | None = None,
    payment_status: PaymentStatus | None = None,
    pricing_mode: PricingMode | None = None,
    custom_price: Decimal | None = None,
    total_price: Decimal | None = None,
    price_per_person: Decimal | None = None,
    private_price: Decimal | None = None,
    pickup_location: str | None = None,
    pickup_time: str | None = None,
    market_source_id: uuid.UUID | None = None,
    market_source_detail: str | None = None,
    agent_id: uuid.UUID | None = None,
    notes: str | None = None,
    reminder_date: date | None = None,
    reminder_text: str | None = None,
    admission: AdmissionTransaction | None = None,
) -> Booking:
    """Apply an edit, re-running admission with the booking excluded from its run.

    ``None`` leaves a field unchanged. Edits touching seats, rate type, tour
    option or price fields re-resolve the stored total unless a new
    ``total_price`` is supplied.
    """
    target_status = _pick(status, booking.status)
    _validate_status_transition(booking.status, target_status)

    guest = await guest_service.get_guest(
        session, guest_id=_pick(guest_id, booking.guest_id)
    )
    vehicle = await fleet_service.get_vehicle(
        session, vehicle_id=_pick(vehicle_id, booking.vehicle_id)
    )
    if vehicle.id != booking.vehicle_id and not vehicle.is_active:
        raise ValueError("Vehicle is not active")
    target_tour_option_id = _pick(tour_option_id, booking.tour_option_id)
    if tour_option_id is not None and tour_option_id != booking.tour_option_id:
        await fleet_service.get_tour_option(session, tour_option_id=tour_option_id)
    target_date = _pick(tour_date, booking.tour_date)
    target_rate_type = _pick(rate_type, booking.rate_type)
    target_seats = _pick(seats, booking.seats)

    _ensure_valid(
        guest,
        tour_date=target_date,
        tour_option_id=target_tour_option_id,
        seats=target_seats,
        pickup_location=_pick(pickup_location, booking.pickup_location),
        pickup_time=_pick(pickup_time, booking.pickup_time),
        market_source_id=_pick(market_source_id, booking.market_source_id),
        status=target_status,
        payment_status=_pick(payment_status, booking.payment_status),
        seat_capacity=vehicle.seat_capacity,
    )
    await _check_attribution(
        session,
        market_source_id=(
            market_source_id if market_source_id != booking.market_source_id else None
        ),
        agent_id=agent_id if agent_id != booking.agent_id else None,
    )
    reprice = total_price is None and any(
        value is not None
        for value in (
            tour_option_id,
            rate_type,
            seats,
            pricing_mode,
            custom_price,
            price_per_person,
            private_price,
        )
    )

    transaction = admission or get_admission_transaction()
    async with transaction.run_scope(str(vehicle.id), target_date):
        if target_status != BookingStatus.CANCELLED:
            locked = await _lock_vehicle(session, vehicle.id)
            await _admit(
                session,
                vehicle=locked,
                tour_date=target_date,
                request=AdmissionRequest(
                    rate_type=target_rate_type,
                    tour_option_id=(
                        str(target_tour_option_id) if target_tour_option_id else None
                    ),
                    seats=target_seats,
                ),
                exclude_booking_id=booking.id,
            )

        booking.guest_id = guest.id
        booking.vehicle_id = vehicle.id
        booking.tour_date = target_date
        booking.tour_option_id = target_tour_option_id
        booking.rate_type = target_rate_type
        booking.seats = target_seats
        booking.status = target_status
        if payment_status is not None:
            booking.payment_status = payment_status
        if pricing_mode is not None:
            booking.pricing_mode = pricing_mode
        if custom_price is not None:
            booking.custom_price = custom_price
        if price_per_person is not None:
            booking.price_per_person = price_per_person
        if private_price is not None:
            booking.private_price = private_price
        if total_price is not None:
            booking.total_price = total_price
        elif reprice:
            booking.total_price = await _priced_total(session, booking)
        if pickup_location is not None:
            booking.pickup_location = pickup_location
        if pickup_time is not None:
            booking.pickup_time = pickup_time
        if market_source_id is not None:
            booking.market_source_id = market_source_id
        if market_source_detail is not None:
            booking.market_source_detail = market_source_detail
        if agent_id is not None:
            booking.agent_id = agent_id
        if notes is not None:
            booking.notes = notes
        if reminder_date is not None:
            booking.reminder_date = reminder_date
        if reminder_text is not None:
            booking.reminder_text = reminder_text
        await session.commit()

    logger.info("Booking %s updated on run %s", booking.booking_ref, booking.tour_run_id)
    return await get_booking(session, booking_id=booking.id)


async def cancel_booking(session: AsyncSession, *, booking: Booking) -> Booking:
    """Cancel a booking; cancelled bookings never count toward a run."""
    _validate_status_transition(booking.status, BookingStatus.CANCELLED)
    booking.status = BookingStatus.CANCELLED
    await session.commit()
    logger.info("Booking %s cancelled", booking.booking_ref)
    return await get_booking(session, booking_id=booking.id)


async def delete_booking(session: AsyncSession, *, booking: Booking) -> None:
    """Remove a booking outright, freeing its seats on the run."""
    reference = booking.booking_ref
    await session.delete(booking)
    await session.commit()
    logger.info("Booking %s deleted", reference)
