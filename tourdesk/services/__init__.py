"""Service layer exports."""
from tourdesk.services import (
    snapshot_service,
    fleet_service,
    guest_service,
    reference_service,
    run_service,
    booking_service,
    vehicle_block_service,
    pricing_service,
)

__all__ = [
    "booking_service",
    "fleet_service",
    "guest_service",
    "pricing_service",
    "reference_service",
    "run_service",
    "snapshot_service",
    "vehicle_block_service",
]
