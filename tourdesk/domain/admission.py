"""Decide whether a booking request may be admitted onto a tour run."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from tourdesk.domain.records import DEFAULT_SEAT_CAPACITY, RateType, RunType, TourRun


class AdmissionCode(str, enum.Enum):
    """Identifies the rule that produced an admission decision."""

    ADMITTED = "admitted"
    EXCEEDS_CAPACITY = "exceeds_capacity"
    RUN_PRIVATE = "run_private"
    RUN_BLOCKED = "run_blocked"
    SHARED_TO_PRIVATE = "shared_to_private"
    TOUR_OPTION_LOCKED = "tour_option_locked"
    NOT_ENOUGH_SEATS = "not_enough_seats"
    UNKNOWN_STATE = "unknown_state"


@dataclass(slots=True, frozen=True)
class AdmissionRequest:
    """The part of a booking that admission cares about."""

    rate_type: RateType
    tour_option_id: str | None
    seats: int


@dataclass(slots=True, frozen=True)
class AdmissionDecision:
    """Outcome of an admission check; ``reason`` is shown to staff as-is."""

    allowed: bool
    code: AdmissionCode
    reason: str | None = None

    @classmethod
    def admit(cls) -> AdmissionDecision:
        return cls(allowed=True, code=AdmissionCode.ADMITTED)

    @classmethod
    def reject(cls, code: AdmissionCode, reason: str) -> AdmissionDecision:
        return cls(allowed=False, code=code, reason=reason)


def check_availability(
    tour_run: TourRun,
    request: AdmissionRequest,
    seat_capacity: int = DEFAULT_SEAT_CAPACITY,
) -> AdmissionDecision:
    """Apply the admission rules in order; the first matching rule wins.

    ``tour_run`` must already exclude the booking being edited, otherwise an
    edit would be counted against its own seats.
    """
    if request.seats > seat_capacity:
        return AdmissionDecision.reject(
            AdmissionCode.EXCEEDS_CAPACITY,
            f"Max capacity is {seat_capacity} people.",
        )

    if tour_run.type is None:
        return AdmissionDecision.admit()

    if tour_run.type == RunType.PRIVATE:
        return AdmissionDecision.reject(
            AdmissionCode.RUN_PRIVATE,
            "This jeep is booked for a Private tour.",
        )

    if tour_run.type == RunType.BLOCKED:
        return AdmissionDecision.reject(
            AdmissionCode.RUN_BLOCKED,
            f"Vehicle unavailable: {tour_run.block_reason or 'Blocked'}",
        )

    if tour_run.type == RunType.SHARED:
        if request.rate_type == RateType.PRIVATE:
            return AdmissionDecision.reject(
                AdmissionCode.SHARED_TO_PRIVATE,
                "Jeep already has Shared bookings. Cannot book Private.",
            )
        if request.tour_option_id != tour_run.tour_option_id:
            return AdmissionDecision.reject(
                AdmissionCode.TOUR_OPTION_LOCKED,
                "Jeep is locked to a different Tour Option.",
            )
        remaining = seat_capacity - tour_run.occupied_seats
        if request.seats > remaining:
            return AdmissionDecision.reject(
                AdmissionCode.NOT_ENOUGH_SEATS,
                f"Not enough seats. Only {remaining} left.",
            )
        return AdmissionDecision.admit()

    return AdmissionDecision.reject(AdmissionCode.UNKNOWN_STATE, "Unknown state.")
