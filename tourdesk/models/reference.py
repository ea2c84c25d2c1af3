"""Market sources and agents that bookings are attributed to."""

from __future__ import annotations

import enum
import uuid
from decimal import Decimal

from sqlalchemy import Boolean, Enum, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from tourdesk.db.base import Base
from tourdesk.models.mixins import TimestampMixin


class SourceCategory(str, enum.Enum):
    """Channel a market source belongs to."""

    OTA = "ota"
    HOTEL = "hotel"
    DIRECT = "direct"
    AGENCY = "agency"


class CommissionType(str, enum.Enum):
    """How an agent's commission is computed from a booking total."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class MarketSource(TimestampMixin, Base):
    """Where a booking came from (OTA, hotel desk, walk-in...)."""

    __tablename__ = "market_sources"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    category: Mapped[SourceCategory] = mapped_column(
        Enum(SourceCategory), default=SourceCategory.DIRECT, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Agent(TimestampMixin, Base):
    """Reseller credited with a booking, optionally on commission."""

    __tablename__ = "agents"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    has_commission: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    commission_type: Mapped[CommissionType] = mapped_column(
        Enum(CommissionType), default=CommissionType.PERCENTAGE, nullable=False
    )
    commission_value: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
