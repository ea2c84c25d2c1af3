"""Tests for booking creation, edits and cancellation."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest

from tourdesk.db.session import get_sessionmaker
from tourdesk.domain.admission import AdmissionCode
from tourdesk.domain.records import BookingStatus, RateType
from tourdesk.models import VehicleBlock
from tourdesk.services import (
    booking_service,
    fleet_service,
    reference_service,
    run_service,
)
from tourdesk.services.errors import (
    AdmissionRejected,
    BookingValidationError,
    NotFoundError,
)
from tourdesk.services.run_locks import LocalRunLock

pytestmark = pytest.mark.asyncio

TOUR_DATE = date(2024, 6, 1)


async def _create(session, fleet: dict[str, object], **overrides):
    values = {
        "guest_id": fleet["guest_id"],
        "vehicle_id": fleet["vehicle_id"],
        "tour_option_id": fleet["tour_option_id"],
        "tour_date": TOUR_DATE,
        "rate_type": RateType.SHARED,
        "seats": 2,
        "status": BookingStatus.CONFIRMED,
        "pickup_location": "Harbour",
        "pickup_time": "08:30",
        "market_source_id": fleet["market_source_id"],
    }
    values.update(overrides)
    return await booking_service.create_booking(session, **values)


async def test_create_booking_fills_run(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet, seats=4)

        assert booking.booking_ref.startswith("TD-")
        assert booking.tour_run_id == f"2024-06-01-{fleet['vehicle_id']}"

        view = await run_service.get_run_state(
            session, vehicle_id=fleet["vehicle_id"], run_date=TOUR_DATE
        )
        assert view.run.occupied_seats == 4
        assert view.run.seats_remaining == 2
        assert view.run.tour_option_id == str(fleet["tour_option_id"])


async def test_overbooking_is_rejected(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await _create(session, fleet, seats=3)

        with pytest.raises(AdmissionRejected) as excinfo:
            await _create(session, fleet, seats=4)

        assert excinfo.value.decision.code is AdmissionCode.NOT_ENOUGH_SEATS
        assert "3 left" in str(excinfo.value)
        bookings = await booking_service.list_bookings(session)
        assert len(bookings) == 1


async def test_tour_option_lock_and_private_exclusivity(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await _create(session, fleet, seats=1)

        with pytest.raises(AdmissionRejected) as locked:
            await _create(session, fleet, tour_option_id=fleet["other_tour_option_id"])
        assert locked.value.decision.code is AdmissionCode.TOUR_OPTION_LOCKED

        with pytest.raises(AdmissionRejected) as private:
            await _create(session, fleet, rate_type=RateType.PRIVATE)
        assert private.value.decision.code is AdmissionCode.SHARED_TO_PRIVATE


async def test_blocked_vehicle_rejects_bookings(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add(
            VehicleBlock(
                vehicle_id=fleet["vehicle_id"], block_date=TOUR_DATE, reason="Service"
            )
        )
        await session.commit()

        with pytest.raises(AdmissionRejected) as excinfo:
            await _create(session, fleet)

        assert excinfo.value.decision.reason == "Vehicle unavailable: Service"


async def test_edit_does_not_count_booking_against_itself(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet, seats=5)

        updated = await booking_service.update_booking(
            session, booking=booking, seats=6
        )
        assert updated.seats == 6

        switched = await booking_service.update_booking(
            session, booking=updated, rate_type=RateType.PRIVATE
        )
        assert switched.rate_type == RateType.PRIVATE


async def test_edit_moving_onto_full_run_is_rejected(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await _create(session, fleet, rate_type=RateType.PRIVATE, seats=2)
        other_day = await _create(session, fleet, tour_date=date(2024, 6, 2))

        with pytest.raises(AdmissionRejected) as excinfo:
            await booking_service.update_booking(
                session, booking=other_day, tour_date=TOUR_DATE
            )

        assert excinfo.value.decision.code is AdmissionCode.RUN_PRIVATE
        refreshed = await booking_service.get_booking(session, booking_id=other_day.id)
        assert refreshed.tour_date == date(2024, 6, 2)


async def test_cancellation_frees_seats(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet, seats=6)

        cancelled = await booking_service.cancel_booking(session, booking=booking)
        assert cancelled.status == BookingStatus.CANCELLED

        replacement = await _create(session, fleet, seats=6)
        assert replacement.seats == 6


async def test_done_bookings_are_final(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet, status=BookingStatus.DONE)

        with pytest.raises(ValueError):
            await booking_service.cancel_booking(session, booking=booking)


async def test_invalid_draft_reports_field_errors(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(BookingValidationError) as excinfo:
            await _create(session, fleet, seats=7, pickup_location=" ")

        assert excinfo.value.errors == {
            "seats": "Max capacity is 6",
            "pickup_location": "Pickup location is required",
        }


async def test_unknown_guest_is_not_found(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(NotFoundError):
            await _create(session, fleet, guest_id=uuid.uuid4())


async def test_explicit_admission_scope_is_used(fleet, db_url: str) -> None:
    lock = LocalRunLock(timeout=1.0)
    seen: list[bool] = []

    class RecordingLock:
        def run_scope(self, vehicle_id, run_date):
            seen.append(run_date == TOUR_DATE)
            return lock.run_scope(vehicle_id, run_date)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await _create(session, fleet, admission=RecordingLock())

    assert seen == [True]
    assert not lock.is_locked(str(fleet["vehicle_id"]), TOUR_DATE)


async def test_blank_edit_keeps_required_fields(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet)

        with pytest.raises(BookingValidationError) as excinfo:
            await booking_service.update_booking(
                session, booking=booking, pickup_location="", pickup_time=""
            )

        assert excinfo.value.errors == {
            "pickup_location": "Pickup location is required",
            "pickup_time": "Pickup time is required",
        }
        refreshed = await booking_service.get_booking(session, booking_id=booking.id)
        assert refreshed.pickup_location == "Harbour"
        assert refreshed.pickup_time == "08:30"


async def test_total_is_stored_when_booked(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet, seats=3)
        assert booking.total_price == Decimal("165.00")

        rates = await fleet_service.list_rates(session)
        whale_watch = next(
            rate for rate in rates if rate.tour_option_id == fleet["tour_option_id"]
        )
        await fleet_service.update_rate(
            session, rate=whale_watch, shared_price=Decimal("99.00")
        )

        refreshed = await booking_service.get_booking(session, booking_id=booking.id)
        assert refreshed.total_price == Decimal("165.00")


async def test_price_affecting_edit_reprices(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet, seats=2)
        assert booking.total_price == Decimal("110.00")

        moved = await booking_service.update_booking(session, booking=booking, seats=4)
        assert moved.total_price == Decimal("220.00")

        noted = await booking_service.update_booking(
            session, booking=moved, notes="Window seats"
        )
        assert noted.total_price == Decimal("220.00")

        agreed = await booking_service.update_booking(
            session, booking=noted, seats=5, total_price=Decimal("250.00")
        )
        assert agreed.total_price == Decimal("250.00")


async def test_explicit_total_is_kept(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet, total_price=Decimal("99.50"))

        assert booking.total_price == Decimal("99.50")


async def test_inactive_market_source_is_refused(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        source = await reference_service.get_market_source(
            session, market_source_id=fleet["market_source_id"]
        )
        await reference_service.update_market_source(
            session, source=source, is_active=False
        )

        with pytest.raises(ValueError, match="not active"):
            await _create(session, fleet)


async def test_delete_booking_removes_it(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await _create(session, fleet, seats=6)

        await booking_service.delete_booking(session, booking=booking)

        with pytest.raises(NotFoundError):
            await booking_service.get_booking(session, booking_id=booking.id)
        view = await run_service.get_run_state(
            session, vehicle_id=fleet["vehicle_id"], run_date=TOUR_DATE
        )
        assert view.run.is_empty
