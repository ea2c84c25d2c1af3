"""Schemas for tour options and rates."""
from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TourOptionCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    color: str | None = Field(default=None, max_length=16)
    is_active: bool = True


class TourOptionRead(TourOptionCreate):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class RateCreate(BaseModel):
    """Payload to price a tour option."""

    tour_option_id: uuid.UUID
    shared_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    private_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    is_active: bool = True


class RateUpdate(BaseModel):
    shared_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    private_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    is_active: bool | None = None


class RateRead(RateCreate):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)
