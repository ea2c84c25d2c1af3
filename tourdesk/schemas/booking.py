"""Pydantic schemas for bookings."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from tourdesk.domain.records import (
    BookingStatus,
    PaymentStatus,
    PricingMode,
    RateType,
)

_PICKUP_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class BookingBase(BaseModel):
    """Shared booking fields."""

    guest_id: uuid.UUID
    vehicle_id: uuid.UUID
    tour_date: date
    tour_option_id: uuid.UUID | None = None
    rate_type: RateType
    seats: int = Field(ge=1)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    pricing_mode: PricingMode = PricingMode.STANDARD
    custom_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    total_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    price_per_person: Decimal | None = Field(default=None, ge=Decimal("0"))
    private_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    pickup_location: str = Field(max_length=255)
    pickup_time: str = Field(pattern=_PICKUP_TIME_PATTERN)
    market_source_id: uuid.UUID | None = None
    market_source_detail: str | None = Field(default=None, max_length=255)
    agent_id: uuid.UUID | None = None
    notes: str | None = None
    reminder_date: date | None = None
    reminder_text: str | None = Field(default=None, max_length=512)


class BookingCreate(BookingBase):
    """Payload for creating bookings."""

    status: BookingStatus = BookingStatus.TENTATIVE


class BookingUpdate(BaseModel):
    """Mutable booking fields."""

    guest_id: uuid.UUID | None = None
    vehicle_id: uuid.UUID | None = None
    tour_date: date | None = None
    tour_option_id: uuid.UUID | None = None
    rate_type: RateType | None = None
    seats: int | None = Field(default=None, ge=1)
    status: BookingStatus | None = None
    payment_status: PaymentStatus | None = None
    pricing_mode: PricingMode | None = None
    custom_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    total_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    price_per_person: Decimal | None = Field(default=None, ge=Decimal("0"))
    private_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    pickup_location: str | None = Field(default=None, max_length=255)
    pickup_time: str | None = Field(default=None, pattern=_PICKUP_TIME_PATTERN)
    market_source_id: uuid.UUID | None = None
    market_source_detail: str | None = Field(default=None, max_length=255)
    agent_id: uuid.UUID | None = None
    notes: str | None = None
    reminder_date: date | None = None
    reminder_text: str | None = Field(default=None, max_length=512)


class BookingRead(BookingBase):
    """Serialized booking representation."""

    id: uuid.UUID
    booking_ref: str | None = None
    tour_run_id: str
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
