"""Specialized settings adapters for the booking engine."""

from __future__ import annotations

from tourdesk.core.config import get_settings
from tourdesk.domain.pricing import FallbackPrices


def get_fallback_prices() -> FallbackPrices:
    """Return the configured last-resort prices."""

    settings = get_settings()
    return FallbackPrices(
        private_price=settings.default_private_price,
        shared_price_per_person=settings.default_shared_price_per_person,
    )


def get_default_capacity() -> int:
    """Return the seat capacity assumed for vehicles without one on record."""

    return get_settings().default_seat_capacity
