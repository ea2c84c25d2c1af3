"""Schemas for guest profiles."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GuestBase(BaseModel):
    """Shared guest fields."""

    first_name: str = Field(min_length=1, max_length=120)
    surname: str = Field(min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=40)
    email: str | None = Field(default=None, max_length=255)
    title: str | None = Field(default=None, max_length=16)
    nationality: str | None = Field(default=None, max_length=80)
    notes: str | None = None


class GuestCreate(GuestBase):
    """Payload to create a guest."""


class GuestRead(GuestBase):
    """Serialized guest response."""

    id: uuid.UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GuestUpdate(BaseModel):
    """Editable guest fields."""

    first_name: str | None = Field(default=None, min_length=1, max_length=120)
    surname: str | None = Field(default=None, min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=40)
    email: str | None = Field(default=None, max_length=255)
    title: str | None = Field(default=None, max_length=16)
    nationality: str | None = Field(default=None, max_length=80)
    notes: str | None = None
