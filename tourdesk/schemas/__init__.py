"""Schema exports."""

from tourdesk.schemas.block import (
    BlockRangeRequest,
    BlockRangeResponse,
    VehicleBlockCreate,
    VehicleBlockRead,
)
from tourdesk.schemas.booking import BookingCreate, BookingRead, BookingUpdate
from tourdesk.schemas.guest import GuestCreate, GuestRead, GuestUpdate
from tourdesk.schemas.pricing import BookingQuoteRead
from tourdesk.schemas.reference import (
    AgentCreate,
    AgentRead,
    AgentUpdate,
    MarketSourceCreate,
    MarketSourceRead,
    MarketSourceUpdate,
)
from tourdesk.schemas.run import (
    AvailabilityRequest,
    AvailabilityResponse,
    RunBookingRead,
    TourRunRead,
)
from tourdesk.schemas.tour import (
    RateCreate,
    RateRead,
    RateUpdate,
    TourOptionCreate,
    TourOptionRead,
)
from tourdesk.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate

__all__ = [
    "AgentCreate",
    "AgentRead",
    "AgentUpdate",
    "AvailabilityRequest",
    "AvailabilityResponse",
    "BlockRangeRequest",
    "BlockRangeResponse",
    "BookingCreate",
    "BookingQuoteRead",
    "BookingRead",
    "BookingUpdate",
    "GuestCreate",
    "GuestRead",
    "GuestUpdate",
    "MarketSourceCreate",
    "MarketSourceRead",
    "MarketSourceUpdate",
    "RateCreate",
    "RateRead",
    "RateUpdate",
    "RunBookingRead",
    "TourOptionCreate",
    "TourOptionRead",
    "TourRunRead",
    "VehicleBlockCreate",
    "VehicleBlockRead",
    "VehicleCreate",
    "VehicleRead",
    "VehicleUpdate",
]
