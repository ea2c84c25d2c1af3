"""Booking management API."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.api import deps
from tourdesk.domain.records import BookingStatus
from tourdesk.schemas.booking import BookingCreate, BookingRead, BookingUpdate
from tourdesk.services import booking_service
from tourdesk.services.errors import (
    AdmissionRejected,
    BookingValidationError,
    NotFoundError,
    RunLockTimeout,
)
from tourdesk.services.run_locks import AdmissionTransaction

router = APIRouter()


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, AdmissionRejected):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"reason": exc.decision.reason, "code": exc.decision.code.value},
        )
    if isinstance(exc, RunLockTimeout):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, BookingValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors
        )
    if isinstance(exc, IntegrityError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Unable to save booking"
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=list[BookingRead], summary="List bookings")
async def list_bookings(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    start_date: date | None = None,
    end_date: date | None = None,
    vehicle_id: uuid.UUID | None = None,
    status_filter: BookingStatus | None = Query(default=None, alias="status"),
    skip: int = 0,
    limit: int = 50,
) -> list[BookingRead]:
    bookings = await booking_service.list_bookings(
        session,
        start_date=start_date,
        end_date=end_date,
        vehicle_id=vehicle_id,
        status=status_filter,
        skip=skip,
        limit=min(limit, 200),
    )
    return [BookingRead.model_validate(obj) for obj in bookings]


@router.post(
    "",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create booking",
)
async def create_booking(
    payload: BookingCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    admission: Annotated[AdmissionTransaction, Depends(deps.get_admission)],
) -> BookingRead:
    try:
        booking = await booking_service.create_booking(
            session, admission=admission, **payload.model_dump()
        )
    except (NotFoundError, ValueError, RunLockTimeout, IntegrityError) as exc:
        raise _http_error(exc) from exc
    return BookingRead.model_validate(booking)


@router.get("/{booking_id}", response_model=BookingRead, summary="Get booking")
async def get_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> BookingRead:
    try:
        booking = await booking_service.get_booking(session, booking_id=booking_id)
    except NotFoundError as exc:
        raise _http_error(exc) from exc
    return BookingRead.model_validate(booking)


@router.patch("/{booking_id}", response_model=BookingRead, summary="Update booking")
async def update_booking(
    booking_id: uuid.UUID,
    payload: BookingUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    admission: Annotated[AdmissionTransaction, Depends(deps.get_admission)],
) -> BookingRead:
    try:
        booking = await booking_service.get_booking(session, booking_id=booking_id)
        updated = await booking_service.update_booking(
            session,
            booking=booking,
            admission=admission,
            **payload.model_dump(exclude_unset=True),
        )
    except (NotFoundError, ValueError, RunLockTimeout, IntegrityError) as exc:
        raise _http_error(exc) from exc
    return BookingRead.model_validate(updated)


@router.post(
    "/{booking_id}/cancel", response_model=BookingRead, summary="Cancel booking"
)
async def cancel_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> BookingRead:
    try:
        booking = await booking_service.get_booking(session, booking_id=booking_id)
        cancelled = await booking_service.cancel_booking(session, booking=booking)
    except (NotFoundError, ValueError) as exc:
        raise _http_error(exc) from exc
    return BookingRead.model_validate(cancelled)


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete booking",
)
async def delete_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Response:
    try:
        booking = await booking_service.get_booking(session, booking_id=booking_id)
    except NotFoundError as exc:
        raise _http_error(exc) from exc
    await booking_service.delete_booking(session, booking=booking)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
