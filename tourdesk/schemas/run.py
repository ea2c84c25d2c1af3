"""Schemas for tour run state and admission checks."""

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field

from tourdesk.domain.admission import AdmissionCode
from tourdesk.domain.records import BookingStatus, RateType, RunType


class RunBookingRead(BaseModel):
    """Booking as listed inside a run."""

    id: str
    rate_type: RateType
    seats: int
    status: BookingStatus
    tour_option_id: str | None = None
    guest_id: str | None = None

    model_config = ConfigDict(from_attributes=True)


class TourRunRead(BaseModel):
    """Derived state of one vehicle on one date."""

    id: str
    date: dt.date
    vehicle_id: str
    vehicle_name: str
    seat_capacity: int
    type: RunType | None
    tour_option_id: str | None
    occupied_seats: int
    seats_remaining: int
    is_full: bool
    is_blocked: bool
    block_reason: str | None = None
    block_id: str | None = None
    active_bookings: list[RunBookingRead] = Field(default_factory=list)
    all_bookings: list[RunBookingRead] = Field(default_factory=list)


class AvailabilityRequest(BaseModel):
    """Prospective booking to check against a run."""

    rate_type: RateType
    tour_option_id: uuid.UUID | None = None
    seats: int = Field(ge=1)
    exclude_booking_id: uuid.UUID | None = None


class AvailabilityResponse(BaseModel):
    allowed: bool
    code: AdmissionCode
    reason: str | None = None
    run: TourRunRead
