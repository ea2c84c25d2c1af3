"""Tour run state and availability lookups."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.domain.admission import (
    AdmissionCode,
    AdmissionDecision,
    AdmissionRequest,
    check_availability,
)
from tourdesk.domain.records import TourRun, VehicleRecord
from tourdesk.domain.run_state import resolve_from_snapshot
from tourdesk.services import fleet_service, snapshot_service

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RunView:
    """A resolved run together with the vehicle it belongs to."""

    vehicle: VehicleRecord
    run: TourRun


@dataclass(slots=True, frozen=True)
class AvailabilityResult:
    vehicle: VehicleRecord
    run: TourRun
    decision: AdmissionDecision


async def get_run_state(
    session: AsyncSession,
    *,
    vehicle_id: uuid.UUID,
    run_date: date,
    exclude_booking_id: uuid.UUID | None = None,
) -> RunView:
    """Resolve one run from a fresh snapshot."""
    vehicle = await fleet_service.get_vehicle(session, vehicle_id=vehicle_id)
    snapshot = await snapshot_service.load_snapshot(
        session, start_date=run_date, end_date=run_date, vehicle_id=vehicle.id
    )
    run = resolve_from_snapshot(
        snapshot,
        run_date,
        str(vehicle.id),
        exclude_booking_id=str(exclude_booking_id) if exclude_booking_id else None,
    )
    return RunView(vehicle=snapshot_service.vehicle_to_record(vehicle), run=run)


def evaluate_admission(
    run: TourRun, request: AdmissionRequest, seat_capacity: int
) -> AdmissionDecision:
    """Check a request and log decisions worth a second look."""
    decision = check_availability(run, request, seat_capacity)
    if decision.code is AdmissionCode.UNKNOWN_STATE:
        logger.warning(
            "Admission reached an unknown run state for run %s (type=%r)",
            run.id,
            run.type,
        )
    elif not decision.allowed:
        logger.info("Admission rejected on run %s: %s", run.id, decision.code.value)
    return decision


async def check_run_availability(
    session: AsyncSession,
    *,
    vehicle_id: uuid.UUID,
    run_date: date,
    request: AdmissionRequest,
    exclude_booking_id: uuid.UUID | None = None,
) -> AvailabilityResult:
    """Resolve the run (minus the booking under edit) and check the request."""
    view = await get_run_state(
        session,
        vehicle_id=vehicle_id,
        run_date=run_date,
        exclude_booking_id=exclude_booking_id,
    )
    decision = evaluate_admission(view.run, request, view.vehicle.seat_capacity)
    return AvailabilityResult(vehicle=view.vehicle, run=view.run, decision=decision)


async def list_day_runs(session: AsyncSession, *, run_date: date) -> list[RunView]:
    """Resolve the run of every active vehicle for a calendar day."""
    snapshot = await snapshot_service.load_snapshot(
        session, start_date=run_date, end_date=run_date
    )
    return [
        RunView(vehicle=vehicle, run=resolve_from_snapshot(snapshot, run_date, vehicle.id))
        for vehicle in snapshot.vehicles
        if vehicle.is_active
    ]
