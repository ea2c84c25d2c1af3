"""Seed a starter fleet, tour options, rate card and market sources."""
from __future__ import annotations

import asyncio
from decimal import Decimal

from sqlalchemy import select

from tourdesk.core.settings import get_default_capacity
from tourdesk.db.session import session_scope
from tourdesk.models import MarketSource, Rate, SourceCategory, TourOption, Vehicle

DEFAULT_VEHICLES = ("Jeep 1", "Jeep 2", "Jeep 3")
DEFAULT_TOURS = {
    "Sunrise Safari": (Decimal("60"), Decimal("350")),
    "Sunset Safari": (Decimal("65"), Decimal("380")),
}
DEFAULT_SOURCES = {
    "Walk-in": SourceCategory.DIRECT,
    "Hotel desk": SourceCategory.HOTEL,
    "GetYourGuide": SourceCategory.OTA,
}


async def seed_fleet() -> None:
    async with session_scope() as session:
        existing_vehicles = set(
            (await session.execute(select(Vehicle.name))).scalars().all()
        )
        existing_tours = set(
            (await session.execute(select(TourOption.name))).scalars().all()
        )
        existing_sources = set(
            (await session.execute(select(MarketSource.name))).scalars().all()
        )
        created = 0
        for name in DEFAULT_VEHICLES:
            if name not in existing_vehicles:
                session.add(Vehicle(name=name, seat_capacity=get_default_capacity()))
                created += 1
        for name, (shared_price, private_price) in DEFAULT_TOURS.items():
            if name in existing_tours:
                continue
            tour_option = TourOption(name=name)
            tour_option.rates.append(
                Rate(shared_price=shared_price, private_price=private_price)
            )
            session.add(tour_option)
            created += 1
        for name, category in DEFAULT_SOURCES.items():
            if name not in existing_sources:
                session.add(MarketSource(name=name, category=category))
                created += 1
        if created:
            await session.commit()
        print(f"Seeded {created} reference record(s).")


def main() -> None:
    asyncio.run(seed_fleet())


if __name__ == "__main__":
    main()
