"""Guest profile helpers."""
from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.models import Booking, Guest
from tourdesk.services.errors import NotFoundError


async def list_guests(
    session: AsyncSession,
    *,
    search: str | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Guest]:
    stmt = select(Guest).order_by(Guest.surname.asc(), Guest.first_name.asc())
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                Guest.first_name.ilike(pattern),
                Guest.surname.ilike(pattern),
                Guest.phone.ilike(pattern),
                Guest.email.ilike(pattern),
            )
        )
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().all()


async def get_guest(session: AsyncSession, *, guest_id: uuid.UUID) -> Guest:
    guest = await session.get(Guest, guest_id)
    if guest is None:
        raise NotFoundError("Guest not found")
    return guest


async def create_guest(
    session: AsyncSession,
    *,
    first_name: str,
    surname: str,
    phone: str | None = None,
    email: str | None = None,
    title: str | None = None,
    nationality: str | None = None,
    notes: str | None = None,
) -> Guest:
    if not (phone or "").strip() and not (email or "").strip():
        raise ValueError("Phone or email is required")
    guest = Guest(
        first_name=first_name.strip(),
        surname=surname.strip(),
        phone=phone,
        email=email,
        title=title,
        nationality=nationality,
        notes=notes,
    )
    session.add(guest)
    await session.commit()
    await session.refresh(guest)
    return guest


async def update_guest(
    session: AsyncSession,
    *,
    guest: Guest,
    first_name: str | None = None,
    surname: str | None = None,
    phone: str | None = None,
    email: str | None = None,
    title: str | None = None,
    nationality: str | None = None,
    notes: str | None = None,
) -> Guest:
    """Edit a guest profile; a phone number or e-mail must remain on file."""
    target_phone = phone if phone is not None else guest.phone
    target_email = email if email is not None else guest.email
    if not (target_phone or "").strip() and not (target_email or "").strip():
        raise ValueError("Phone or email is required")
    if first_name is not None:
        guest.first_name = first_name.strip()
    if surname is not None:
        guest.surname = surname.strip()
    guest.phone = target_phone
    guest.email = target_email
    if title is not None:
        guest.title = title
    if nationality is not None:
        guest.nationality = nationality
    if notes is not None:
        guest.notes = notes
    await session.commit()
    await session.refresh(guest)
    return guest


async def delete_guest(session: AsyncSession, *, guest: Guest) -> None:
    """Delete a guest that has never been booked."""
    booking_count = await session.scalar(
        select(func.count()).select_from(Booking).where(Booking.guest_id == guest.id)
    )
    if booking_count:
        raise ValueError("Guest has existing bookings and cannot be deleted")
    await session.delete(guest)
    await session.commit()
