"""Field-level validation for booking drafts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from tourdesk.domain.records import DEFAULT_SEAT_CAPACITY


@dataclass(slots=True)
class BookingDraft:
    """Everything staff fill in on the booking form."""

    first_name: str | None = None
    surname: str | None = None
    phone: str | None = None
    email: str | None = None
    date: date | None = None
    tour_option_id: str | None = None
    seats: int | None = None
    pickup_location: str | None = None
    pickup_time: str | None = None
    market_source_id: str | None = None
    status: str | None = None
    payment_status: str | None = None


@dataclass(slots=True)
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _blank(value: str | None) -> bool:
    return not (value or "").strip()


def validate_booking(
    draft: BookingDraft, seat_capacity: int = DEFAULT_SEAT_CAPACITY
) -> ValidationResult:
    """Collect every missing or out-of-range field instead of stopping at one."""
    errors: dict[str, str] = {}

    if _blank(draft.first_name):
        errors["first_name"] = "First name is required"
    if _blank(draft.surname):
        errors["surname"] = "Surname is required"
    if _blank(draft.phone) and _blank(draft.email):
        errors["phone"] = "Phone or email is required"
        errors["email"] = "Phone or email is required"

    if draft.date is None:
        errors["date"] = "Tour date is required"
    if not draft.tour_option_id:
        errors["tour_option_id"] = "Tour option is required"
    if not draft.seats or draft.seats < 1:
        errors["seats"] = "Pax must be at least 1"
    elif draft.seats > seat_capacity:
        errors["seats"] = f"Max capacity is {seat_capacity}"

    if _blank(draft.pickup_location):
        errors["pickup_location"] = "Pickup location is required"
    if _blank(draft.pickup_time):
        errors["pickup_time"] = "Pickup time is required"

    if not draft.market_source_id:
        errors["market_source_id"] = "Market source is required"
    if not draft.status:
        errors["status"] = "Booking status is required"
    if not draft.payment_status:
        errors["payment_status"] = "Payment status is required"

    return ValidationResult(errors=errors)
