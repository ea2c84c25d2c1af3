"""Booking pricing API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.api import deps
from tourdesk.schemas.pricing import BookingQuoteRead
from tourdesk.services import pricing_service
from tourdesk.services.errors import NotFoundError

router = APIRouter()


@router.get(
    "/bookings/{booking_id}",
    response_model=BookingQuoteRead,
    summary="Resolve the total for a booking",
)
async def quote_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> BookingQuoteRead:
    try:
        quote = await pricing_service.quote_booking(session, booking_id=booking_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return BookingQuoteRead.model_validate(quote)
