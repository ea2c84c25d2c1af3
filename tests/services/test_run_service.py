"""Tests for run lookups and availability checks."""

from __future__ import annotations

from datetime import date

import pytest

from tourdesk.db.session import get_sessionmaker
from tourdesk.domain.admission import AdmissionCode, AdmissionRequest
from tourdesk.domain.records import BookingStatus, RateType, RunType
from tourdesk.models import Vehicle
from tourdesk.services import booking_service, fleet_service, run_service

pytestmark = pytest.mark.asyncio

TOUR_DATE = date(2024, 6, 1)


async def test_capacity_change_applies_to_next_evaluation(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await booking_service.create_booking(
            session,
            guest_id=fleet["guest_id"],
            vehicle_id=fleet["vehicle_id"],
            tour_option_id=fleet["tour_option_id"],
            tour_date=TOUR_DATE,
            rate_type=RateType.SHARED,
            seats=4,
            status=BookingStatus.CONFIRMED,
            pickup_location="Harbour",
            pickup_time="08:30",
            market_source_id=fleet["market_source_id"],
        )
        vehicle = await fleet_service.get_vehicle(session, vehicle_id=fleet["vehicle_id"])
        await fleet_service.update_vehicle(session, vehicle=vehicle, seat_capacity=8)

        result = await run_service.check_run_availability(
            session,
            vehicle_id=fleet["vehicle_id"],
            run_date=TOUR_DATE,
            request=AdmissionRequest(RateType.SHARED, str(fleet["tour_option_id"]), 4),
        )

        assert result.decision.allowed
        assert result.run.seats_remaining == 4
        assert result.vehicle.seat_capacity == 8


async def test_excluded_booking_frees_its_seats(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await booking_service.create_booking(
            session,
            guest_id=fleet["guest_id"],
            vehicle_id=fleet["vehicle_id"],
            tour_option_id=fleet["tour_option_id"],
            tour_date=TOUR_DATE,
            rate_type=RateType.PRIVATE,
            seats=2,
            status=BookingStatus.TENTATIVE,
            pickup_location="Hotel Sol",
            pickup_time="07:45",
            market_source_id=fleet["market_source_id"],
        )

        blocked = await run_service.check_run_availability(
            session,
            vehicle_id=fleet["vehicle_id"],
            run_date=TOUR_DATE,
            request=AdmissionRequest(RateType.SHARED, None, 1),
        )
        assert blocked.decision.code is AdmissionCode.RUN_PRIVATE

        editing = await run_service.get_run_state(
            session,
            vehicle_id=fleet["vehicle_id"],
            run_date=TOUR_DATE,
            exclude_booking_id=booking.id,
        )
        assert editing.run.type is None
        assert editing.run.occupied_seats == 0


async def test_day_runs_cover_active_vehicles(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add_all(
            [
                Vehicle(name="Jeep 2", seat_capacity=4),
                Vehicle(name="Old Jeep", seat_capacity=6, is_active=False),
            ]
        )
        await session.commit()
        await booking_service.create_booking(
            session,
            guest_id=fleet["guest_id"],
            vehicle_id=fleet["vehicle_id"],
            tour_option_id=fleet["tour_option_id"],
            tour_date=TOUR_DATE,
            rate_type=RateType.SHARED,
            seats=3,
            status=BookingStatus.CONFIRMED,
            pickup_location="Harbour",
            pickup_time="08:30",
            market_source_id=fleet["market_source_id"],
        )

        views = await run_service.list_day_runs(session, run_date=TOUR_DATE)

        by_name = {view.vehicle.name: view.run for view in views}
        assert set(by_name) == {"Jeep 1", "Jeep 2"}
        assert by_name["Jeep 1"].type is RunType.SHARED
        assert by_name["Jeep 1"].seats_remaining == 3
        assert by_name["Jeep 2"].seats_remaining == 4
