"""Guest profiles."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourdesk.db.base import Base
from tourdesk.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from tourdesk.models.booking import Booking


class Guest(TimestampMixin, Base):
    """Lead guest a booking is made for."""

    __tablename__ = "guests"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    title: Mapped[str | None] = mapped_column(String(16))
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    surname: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(40), index=True)
    email: Mapped[str | None] = mapped_column(String(255))
    nationality: Mapped[str | None] = mapped_column(String(80))
    notes: Mapped[str | None] = mapped_column(String(1024))

    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="guest"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.surname}".strip()
