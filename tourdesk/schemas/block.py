"""Schemas for vehicle blocks."""
from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VehicleBlockCreate(BaseModel):
    """Payload to block a vehicle for one day."""

    vehicle_id: uuid.UUID
    block_date: date
    reason: str | None = Field(default=None, max_length=255)


class VehicleBlockRead(VehicleBlockCreate):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class BlockRangeRequest(BaseModel):
    """Payload to block a vehicle across an inclusive date range."""

    vehicle_id: uuid.UUID
    start_date: date
    end_date: date
    reason: str | None = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def _check_range(self) -> "BlockRangeRequest":
        if self.start_date > self.end_date:
            raise ValueError("start_date must be before or equal to end_date")
        return self


class BlockRangeResponse(BaseModel):
    success_count: int
    skipped_dates: list[date]
