"""Pure tour-run engine: run state, admission, pricing and range blocking."""

from tourdesk.domain.admission import (
    AdmissionCode,
    AdmissionDecision,
    AdmissionRequest,
    check_availability,
)
from tourdesk.domain.blocking import (
    BlockRangePlan,
    BlockRangeResult,
    block_range,
    plan_block_range,
)
from tourdesk.domain.pricing import (
    FallbackPrices,
    PriceResolution,
    PriceSource,
    calculate_total,
    resolve_price,
)
from tourdesk.domain.records import (
    DEFAULT_SEAT_CAPACITY,
    BlockRecord,
    BookingRecord,
    BookingStatus,
    PaymentStatus,
    PricingMode,
    RateRecord,
    RateType,
    RunSnapshot,
    RunType,
    TourRun,
    VehicleRecord,
    make_tour_run_id,
)
from tourdesk.domain.run_state import resolve_from_snapshot, resolve_run_state
from tourdesk.domain.validation import BookingDraft, ValidationResult, validate_booking

__all__ = [
    "AdmissionCode",
    "AdmissionDecision",
    "AdmissionRequest",
    "check_availability",
    "BlockRangePlan",
    "BlockRangeResult",
    "block_range",
    "plan_block_range",
    "FallbackPrices",
    "PriceResolution",
    "PriceSource",
    "calculate_total",
    "resolve_price",
    "DEFAULT_SEAT_CAPACITY",
    "BlockRecord",
    "BookingRecord",
    "BookingStatus",
    "PaymentStatus",
    "PricingMode",
    "RateRecord",
    "RateType",
    "RunSnapshot",
    "RunType",
    "TourRun",
    "VehicleRecord",
    "make_tour_run_id",
    "resolve_from_snapshot",
    "resolve_run_state",
    "BookingDraft",
    "ValidationResult",
    "validate_booking",
]
