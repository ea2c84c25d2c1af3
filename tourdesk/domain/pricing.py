"""Booking total resolution.

The total is resolved by trying each strategy in ``PRICE_STRATEGIES`` in order
and taking the first that produces an amount:

1. free-form price (``pricing_mode == FREE``)
2. a stored total already on the booking
3. the booking's own per-person / private price fields
4. the active rate card entry for the booking's tour option
5. hard defaults

Every strategy degrades to a number; pricing never raises for missing or
malformed data.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from tourdesk.domain.records import BookingRecord, PricingMode, RateRecord, RateType

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")


class PriceSource(str, enum.Enum):
    """Which rung of the ladder produced a total."""

    FREE = "free"
    STORED_TOTAL = "stored_total"
    BOOKING_FIELDS = "booking_fields"
    RATE_TABLE = "rate_table"
    DEFAULT = "default"


@dataclass(slots=True, frozen=True)
class FallbackPrices:
    """Amounts used when neither the booking nor the rate card has a price."""

    private_price: Decimal = Decimal("350")
    shared_price_per_person: Decimal = Decimal("60")


DEFAULT_FALLBACK_PRICES = FallbackPrices()


@dataclass(slots=True, frozen=True)
class PriceResolution:
    """A resolved total tagged with where it came from."""

    amount: Decimal
    source: PriceSource


def to_money(value: object) -> Decimal:
    """Coerce ``value`` to a cent-quantized Decimal, treating junk as zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    return amount.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _seats(booking: BookingRecord) -> int:
    try:
        return int(booking.seats or 0)
    except (TypeError, ValueError):
        return 0


def _is_private(booking: BookingRecord) -> bool:
    return booking.rate_type == RateType.PRIVATE


def _free_price(
    booking: BookingRecord, rates: Sequence[RateRecord], fallback: FallbackPrices
) -> PriceResolution | None:
    if booking.pricing_mode != PricingMode.FREE:
        return None
    return PriceResolution(to_money(booking.custom_price), PriceSource.FREE)


def _stored_total(
    booking: BookingRecord, rates: Sequence[RateRecord], fallback: FallbackPrices
) -> PriceResolution | None:
    if booking.total_price is None:
        return None
    return PriceResolution(to_money(booking.total_price), PriceSource.STORED_TOTAL)


def _booking_fields(
    booking: BookingRecord, rates: Sequence[RateRecord], fallback: FallbackPrices
) -> PriceResolution | None:
    if _is_private(booking):
        if to_money(booking.private_price):
            return PriceResolution(
                to_money(booking.private_price), PriceSource.BOOKING_FIELDS
            )
        return None
    per_person = to_money(booking.price_per_person)
    if per_person:
        return PriceResolution(
            to_money(per_person * _seats(booking)), PriceSource.BOOKING_FIELDS
        )
    return None


def find_rate(
    rates: Iterable[RateRecord], tour_option_id: str | None
) -> RateRecord | None:
    """Return the first active rate for the tour option."""
    if not tour_option_id:
        return None
    for rate in rates:
        if rate.tour_id == tour_option_id and rate.is_active:
            return rate
    return None


def _rate_table(
    booking: BookingRecord, rates: Sequence[RateRecord], fallback: FallbackPrices
) -> PriceResolution | None:
    rate = find_rate(rates, booking.tour_option_id)
    if rate is None:
        return None
    if _is_private(booking):
        amount = to_money(rate.private_price) or to_money(fallback.private_price)
    else:
        per_person = to_money(rate.shared_price) or to_money(
            fallback.shared_price_per_person
        )
        amount = to_money(per_person * _seats(booking))
    return PriceResolution(amount, PriceSource.RATE_TABLE)


def _default_price(
    booking: BookingRecord, rates: Sequence[RateRecord], fallback: FallbackPrices
) -> PriceResolution | None:
    if _is_private(booking):
        return PriceResolution(to_money(fallback.private_price), PriceSource.DEFAULT)
    return PriceResolution(
        to_money(to_money(fallback.shared_price_per_person) * _seats(booking)),
        PriceSource.DEFAULT,
    )


PriceStrategy = Callable[
    [BookingRecord, Sequence[RateRecord], FallbackPrices], "PriceResolution | None"
]

PRICE_STRATEGIES: tuple[PriceStrategy, ...] = (
    _free_price,
    _stored_total,
    _booking_fields,
    _rate_table,
    _default_price,
)


def resolve_price(
    booking: BookingRecord,
    rates: Iterable[RateRecord] | None = None,
    *,
    fallback: FallbackPrices = DEFAULT_FALLBACK_PRICES,
) -> PriceResolution:
    """Return the first resolution produced by the strategy chain."""
    rate_list = tuple(rates or ())
    for strategy in PRICE_STRATEGIES:
        resolution = strategy(booking, rate_list, fallback)
        if resolution is not None:
            return resolution
    # _default_price always resolves; kept for type checkers.
    return PriceResolution(ZERO, PriceSource.DEFAULT)


def calculate_total(
    booking: BookingRecord,
    rates: Iterable[RateRecord] | None = None,
    *,
    fallback: FallbackPrices = DEFAULT_FALLBACK_PRICES,
) -> Decimal:
    """Return the booking's monetary total."""
    return resolve_price(booking, rates, fallback=fallback).amount
