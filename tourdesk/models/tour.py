"""Tour options and their rate card."""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourdesk.db.base import Base
from tourdesk.models.mixins import TimestampMixin


class TourOption(TimestampMixin, Base):
    """A sellable tour product."""

    __tablename__ = "tour_options"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    color: Mapped[str | None] = mapped_column(String(16))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    rates: Mapped[list["Rate"]] = relationship(
        "Rate", back_populates="tour_option", cascade="all, delete-orphan"
    )


class Rate(TimestampMixin, Base):
    """Per-person shared price and flat private price for a tour option."""

    __tablename__ = "rates"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    tour_option_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("tour_options.id", ondelete="CASCADE"), nullable=False
    )
    shared_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    private_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    tour_option: Mapped["TourOption"] = relationship(
        "TourOption", back_populates="rates"
    )
