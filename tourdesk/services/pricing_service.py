"""Booking price quotes."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.core.config import get_settings
from tourdesk.core.settings import get_fallback_prices
from tourdesk.domain.pricing import ZERO, PriceSource, resolve_price, to_money
from tourdesk.models import Agent, CommissionType
from tourdesk.services import booking_service, snapshot_service


@dataclass(slots=True)
class BookingQuote:
    """Resolved total for a booking and the rung of the ladder it came from."""

    booking_id: uuid.UUID
    total: Decimal
    source: PriceSource
    currency: str
    commission: Decimal = ZERO
    net: Decimal = ZERO


def agent_commission(agent: Agent | None, total: Decimal) -> Decimal:
    """Commission owed to the booking's agent; direct bookings owe nothing."""
    if agent is None or not agent.has_commission:
        return ZERO
    value = to_money(agent.commission_value)
    if agent.commission_type is CommissionType.FIXED:
        return value
    return to_money(total * value / 100)


async def quote_booking(session: AsyncSession, *, booking_id: uuid.UUID) -> BookingQuote:
    """Price a stored booking, falling back to the current rate card."""
    booking = await booking_service.get_booking(session, booking_id=booking_id)
    rates = await snapshot_service.list_rate_records(session)
    resolution = resolve_price(
        snapshot_service.booking_to_record(booking),
        rates,
        fallback=get_fallback_prices(),
    )
    commission = agent_commission(booking.agent, resolution.amount)
    return BookingQuote(
        booking_id=booking.id,
        total=resolution.amount,
        source=resolution.source,
        currency=get_settings().currency,
        commission=commission,
        net=to_money(resolution.amount - commission),
    )
