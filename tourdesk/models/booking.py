"""Booking model."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourdesk.db.base import Base
from tourdesk.domain.records import (
    BookingStatus,
    PaymentStatus,
    PricingMode,
    RateType,
    make_tour_run_id,
)
from tourdesk.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from tourdesk.models.guest import Guest
    from tourdesk.models.reference import Agent, MarketSource
    from tourdesk.models.tour import TourOption
    from tourdesk.models.vehicle import Vehicle


class Booking(TimestampMixin, Base):
    """A guest party booked onto one vehicle on one date."""

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    booking_ref: Mapped[str | None] = mapped_column(String(32), unique=True)
    guest_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("guests.id", ondelete="RESTRICT"), nullable=False
    )
    vehicle_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False
    )
    tour_option_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("tour_options.id", ondelete="SET NULL")
    )
    tour_date: Mapped[date] = mapped_column(Date(), nullable=False, index=True)
    rate_type: Mapped[RateType] = mapped_column(Enum(RateType), nullable=False)
    seats: Mapped[int] = mapped_column(Integer(), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus), default=BookingStatus.TENTATIVE, nullable=False
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False
    )
    pricing_mode: Mapped[PricingMode] = mapped_column(
        Enum(PricingMode), default=PricingMode.STANDARD, nullable=False
    )
    custom_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    total_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    price_per_person: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    private_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    pickup_location: Mapped[str] = mapped_column(String(255), nullable=False)
    pickup_time: Mapped[str] = mapped_column(String(5), nullable=False)
    market_source_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("market_sources.id", ondelete="RESTRICT"), nullable=False
    )
    market_source_detail: Mapped[str | None] = mapped_column(String(255))
    agent_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("agents.id", ondelete="SET NULL")
    )
    notes: Mapped[str | None] = mapped_column(String(2048))
    reminder_date: Mapped[date | None] = mapped_column(Date())
    reminder_text: Mapped[str | None] = mapped_column(String(512))

    guest: Mapped["Guest"] = relationship("Guest", back_populates="bookings")
    vehicle: Mapped["Vehicle"] = relationship("Vehicle", back_populates="bookings")
    tour_option: Mapped["TourOption | None"] = relationship("TourOption")
    market_source: Mapped["MarketSource"] = relationship("MarketSource")
    agent: Mapped["Agent | None"] = relationship("Agent")

    @property
    def tour_run_id(self) -> str:
        return make_tour_run_id(self.tour_date, str(self.vehicle_id))
