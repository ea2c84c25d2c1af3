"""Pricing schema definitions."""

from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from tourdesk.domain.pricing import PriceSource


class BookingQuoteRead(BaseModel):
    """Resolved booking total."""

    booking_id: uuid.UUID
    total: Decimal
    source: PriceSource
    currency: str
    commission: Decimal
    net: Decimal

    model_config = ConfigDict(from_attributes=True)
