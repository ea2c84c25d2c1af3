"""Plain records consumed and produced by the tour-run engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

DEFAULT_SEAT_CAPACITY = 6


class RateType(str, enum.Enum):
    """How a booking occupies a vehicle."""

    SHARED = "shared"
    PRIVATE = "private"


class RunType(str, enum.Enum):
    """Derived mode of a tour run."""

    SHARED = "shared"
    PRIVATE = "private"
    BLOCKED = "blocked"


class BookingStatus(str, enum.Enum):
    """Lifecycle states for bookings."""

    TENTATIVE = "tentative"
    CONFIRMED = "confirmed"
    DONE = "done"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """How (or whether) a booking has been paid."""

    PENDING = "pending"
    CASH = "cash"
    CARD = "card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"
    COMPLIMENTARY = "complimentary"


class PricingMode(str, enum.Enum):
    """Whether the booking follows the rate card or a free-form price."""

    STANDARD = "standard"
    FREE = "free"


def make_tour_run_id(run_date: date, vehicle_id: str) -> str:
    """Return the composite key identifying one vehicle on one date."""
    return f"{run_date.isoformat()}-{vehicle_id}"


@dataclass(slots=True, frozen=True)
class VehicleRecord:
    """Vehicle as seen by the engine."""

    id: str
    name: str
    seat_capacity: int = DEFAULT_SEAT_CAPACITY
    is_active: bool = True


@dataclass(slots=True, frozen=True)
class BlockRecord:
    """A vehicle made wholly unavailable on a date."""

    id: str
    vehicle_id: str
    date: date
    reason: str | None = None


@dataclass(slots=True, frozen=True)
class RateRecord:
    """Rate card entry used as a pricing fallback."""

    tour_id: str
    shared_price: Decimal | None = None
    private_price: Decimal | None = None
    is_active: bool = True


@dataclass(slots=True, frozen=True)
class BookingRecord:
    """Booking fields the engine reads.

    ``tour_run_id`` is always derived from ``date`` and ``vehicle_id``.
    """

    id: str
    date: date
    vehicle_id: str
    rate_type: RateType
    seats: int
    status: BookingStatus = BookingStatus.CONFIRMED
    tour_option_id: str | None = None
    guest_id: str | None = None
    pricing_mode: PricingMode = PricingMode.STANDARD
    custom_price: Decimal | None = None
    total_price: Decimal | None = None
    price_per_person: Decimal | None = None
    private_price: Decimal | None = None
    created_at: datetime | None = None

    @property
    def tour_run_id(self) -> str:
        return make_tour_run_id(self.date, self.vehicle_id)

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED


@dataclass(slots=True, frozen=True)
class TourRun:
    """Live state of one vehicle on one date. Never cached."""

    id: str
    date: date
    vehicle_id: str
    type: RunType | None
    tour_option_id: str | None
    occupied_seats: int
    seats_remaining: int
    active_bookings: tuple[BookingRecord, ...] = ()
    all_bookings: tuple[BookingRecord, ...] = ()
    is_full: bool = False
    is_blocked: bool = False
    block_reason: str | None = None
    block_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.type is None


@dataclass(slots=True, frozen=True)
class RunSnapshot:
    """Read-only dataset a caller hands to the engine for one evaluation."""

    bookings: tuple[BookingRecord, ...] = ()
    blocks: tuple[BlockRecord, ...] = ()
    vehicles: tuple[VehicleRecord, ...] = ()
    rates: tuple[RateRecord, ...] = ()
    default_capacity: int = DEFAULT_SEAT_CAPACITY
    _capacities: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_capacities",
            {vehicle.id: vehicle.seat_capacity for vehicle in self.vehicles},
        )

    def seat_capacity(self, vehicle_id: str) -> int:
        """Return the vehicle's current capacity, or the default when unknown."""
        return self._capacities.get(vehicle_id, self.default_capacity)

