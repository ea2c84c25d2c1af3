"""Tour run state and availability API."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.api import deps
from tourdesk.domain.admission import AdmissionRequest
from tourdesk.domain.records import TourRun, VehicleRecord
from tourdesk.schemas.run import (
    AvailabilityRequest,
    AvailabilityResponse,
    RunBookingRead,
    TourRunRead,
)
from tourdesk.services import run_service
from tourdesk.services.errors import NotFoundError

router = APIRouter()


def _serialize_run(vehicle: VehicleRecord, run: TourRun) -> TourRunRead:
    return TourRunRead(
        id=run.id,
        date=run.date,
        vehicle_id=run.vehicle_id,
        vehicle_name=vehicle.name,
        seat_capacity=vehicle.seat_capacity,
        type=run.type,
        tour_option_id=run.tour_option_id,
        occupied_seats=run.occupied_seats,
        seats_remaining=run.seats_remaining,
        is_full=run.is_full,
        is_blocked=run.is_blocked,
        block_reason=run.block_reason,
        block_id=run.block_id,
        active_bookings=[RunBookingRead.model_validate(b) for b in run.active_bookings],
        all_bookings=[RunBookingRead.model_validate(b) for b in run.all_bookings],
    )


@router.get("", response_model=list[TourRunRead], summary="List runs for a day")
async def list_day_runs(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    run_date: date = Query(alias="date"),
) -> list[TourRunRead]:
    views = await run_service.list_day_runs(session, run_date=run_date)
    return [_serialize_run(view.vehicle, view.run) for view in views]


@router.get(
    "/{vehicle_id}/{run_date}", response_model=TourRunRead, summary="Get run state"
)
async def get_run(
    vehicle_id: uuid.UUID,
    run_date: date,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    exclude_booking_id: uuid.UUID | None = None,
) -> TourRunRead:
    try:
        view = await run_service.get_run_state(
            session,
            vehicle_id=vehicle_id,
            run_date=run_date,
            exclude_booking_id=exclude_booking_id,
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return _serialize_run(view.vehicle, view.run)


@router.post(
    "/{vehicle_id}/{run_date}/availability",
    response_model=AvailabilityResponse,
    summary="Check whether a run can take a booking",
)
async def check_availability(
    vehicle_id: uuid.UUID,
    run_date: date,
    payload: AvailabilityRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AvailabilityResponse:
    request = AdmissionRequest(
        rate_type=payload.rate_type,
        tour_option_id=str(payload.tour_option_id) if payload.tour_option_id else None,
        seats=payload.seats,
    )
    try:
        result = await run_service.check_run_availability(
            session,
            vehicle_id=vehicle_id,
            run_date=run_date,
            request=request,
            exclude_booking_id=payload.exclude_booking_id,
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return AvailabilityResponse(
        allowed=result.decision.allowed,
        code=result.decision.code,
        reason=result.decision.reason,
        run=_serialize_run(result.vehicle, result.run),
    )
