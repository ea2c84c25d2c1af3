"""Vehicles (jeeps) and their date blocks."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourdesk.db.base import Base
from tourdesk.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from tourdesk.models.booking import Booking


class Vehicle(TimestampMixin, Base):
    """A vehicle that runs tours; capacity is read at evaluation time."""

    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    driver_name: Mapped[str | None] = mapped_column(String(120))
    seat_capacity: Mapped[int] = mapped_column(Integer(), default=6, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    blocks: Mapped[list["VehicleBlock"]] = relationship(
        "VehicleBlock", back_populates="vehicle", cascade="all, delete-orphan"
    )
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="vehicle"
    )


class VehicleBlock(TimestampMixin, Base):
    """Marks a vehicle wholly unavailable on a date."""

    __tablename__ = "vehicle_blocks"
    __table_args__ = (
        UniqueConstraint("vehicle_id", "block_date", name="uq_vehicle_block_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    vehicle_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False
    )
    block_date: Mapped[date] = mapped_column(Date(), nullable=False, index=True)
    reason: Mapped[str | None] = mapped_column(String(255))

    vehicle: Mapped["Vehicle"] = relationship("Vehicle", back_populates="blocks")
