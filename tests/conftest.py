"""Test fixtures for the tour desk backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.pop("REDIS_URL", None)

from tourdesk.core.config import get_settings
from tourdesk.db.base import Base
from tourdesk.db.session import dispose_engine, get_sessionmaker
from tourdesk.main import app
from tourdesk.models import Agent, Guest, MarketSource, Rate, TourOption, Vehicle
from tourdesk.services.run_locks import set_admission_transaction


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()
    set_admission_transaction(None)

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    set_admission_transaction(None)
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def fleet(reset_database: None, db_url: str) -> dict[str, object]:
    """Seed one jeep, one guest, two priced tour options and their attribution."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        vehicle = Vehicle(name="Jeep 1", seat_capacity=6)
        guest = Guest(
            first_name="Maria",
            surname="Lopez",
            phone="+34 600 000 000",
            email="maria@example.com",
        )
        whale_watch = TourOption(name="Whale Watch")
        sunset = TourOption(name="Sunset Safari")
        walk_in = MarketSource(name="Walk-in")
        agent = Agent(
            name="Island Tours", has_commission=True, commission_value=Decimal("10")
        )
        session.add_all([vehicle, guest, whale_watch, sunset, walk_in, agent])
        await session.flush()

        session.add_all(
            [
                Rate(
                    tour_option_id=whale_watch.id,
                    shared_price=Decimal("55.00"),
                    private_price=Decimal("300.00"),
                ),
                Rate(
                    tour_option_id=sunset.id,
                    shared_price=Decimal("70.00"),
                    private_price=Decimal("400.00"),
                ),
            ]
        )
        await session.commit()

        return {
            "vehicle_id": vehicle.id,
            "guest_id": guest.id,
            "tour_option_id": whale_watch.id,
            "other_tour_option_id": sunset.id,
            "market_source_id": walk_in.id,
            "agent_id": agent.id,
        }


@pytest_asyncio.fixture()
async def app_context(
    fleet: dict[str, object],
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client alongside the seeded fleet."""
    context = dict(fleet)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
