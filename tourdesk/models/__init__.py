"""ORM models package export."""

from tourdesk.domain.records import BookingStatus, PaymentStatus, PricingMode, RateType
from tourdesk.models.booking import Booking
from tourdesk.models.guest import Guest
from tourdesk.models.reference import (
    Agent,
    CommissionType,
    MarketSource,
    SourceCategory,
)
from tourdesk.models.tour import Rate, TourOption
from tourdesk.models.vehicle import Vehicle, VehicleBlock

__all__ = [
    "Agent",
    "Booking",
    "BookingStatus",
    "CommissionType",
    "Guest",
    "MarketSource",
    "PaymentStatus",
    "PricingMode",
    "Rate",
    "RateType",
    "SourceCategory",
    "TourOption",
    "Vehicle",
    "VehicleBlock",
]
