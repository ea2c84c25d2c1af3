"""Exceptions raised by the service layer."""

from __future__ import annotations

from tourdesk.domain.admission import AdmissionDecision


class NotFoundError(LookupError):
    """Requested row does not exist."""


class BookingValidationError(ValueError):
    """Booking draft failed field validation."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Booking is invalid")
        self.errors = errors


class AdmissionRejected(ValueError):
    """The run cannot accept the booking request."""

    def __init__(self, decision: AdmissionDecision) -> None:
        super().__init__(decision.reason or "Booking not admitted")
        self.decision = decision


class RunLockTimeout(RuntimeError):
    """Another admission on the same run held the lock for too long."""
