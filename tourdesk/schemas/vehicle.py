"""Schemas for vehicles."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VehicleBase(BaseModel):
    """Shared vehicle fields."""

    name: str = Field(min_length=1, max_length=120)
    seat_capacity: int = Field(default=6, ge=1)
    driver_name: str | None = None
    is_active: bool = True


class VehicleCreate(VehicleBase):
    """Payload to add a vehicle to the fleet."""


class VehicleUpdate(BaseModel):
    """Mutable vehicle fields."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    seat_capacity: int | None = Field(default=None, ge=1)
    driver_name: str | None = None
    is_active: bool | None = None


class VehicleRead(VehicleBase):
    """Serialized vehicle response."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
