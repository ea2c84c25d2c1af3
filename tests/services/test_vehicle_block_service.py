"""Tests for vehicle blocks."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from tourdesk.db.session import get_sessionmaker
from tourdesk.domain.records import BookingStatus, RateType
from tourdesk.domain.run_state import resolve_from_snapshot
from tourdesk.models import VehicleBlock
from tourdesk.services import booking_service, vehicle_block_service
from tourdesk.services.run_locks import LocalRunLock

pytestmark = pytest.mark.asyncio


async def _book(session, fleet: dict[str, object], tour_date: date):
    return await booking_service.create_booking(
        session,
        guest_id=fleet["guest_id"],
        vehicle_id=fleet["vehicle_id"],
        tour_option_id=fleet["tour_option_id"],
        tour_date=tour_date,
        rate_type=RateType.SHARED,
        seats=2,
        status=BookingStatus.CONFIRMED,
        pickup_location="Harbour",
        pickup_time="08:30",
        market_source_id=fleet["market_source_id"],
    )


async def test_block_range_skips_booked_days(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await _book(session, fleet, date(2024, 6, 2))

        result = await vehicle_block_service.block_vehicle_range(
            session,
            vehicle_id=fleet["vehicle_id"],
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 3),
            reason="maintenance",
        )

        assert result.success_count == 2
        assert result.skipped_dates == [date(2024, 6, 2)]

        blocks = await vehicle_block_service.list_blocks(
            session,
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 3),
            vehicle_id=fleet["vehicle_id"],
        )
        assert [block.block_date for block in blocks] == [
            date(2024, 6, 1),
            date(2024, 6, 3),
        ]
        assert {block.reason for block in blocks} == {"maintenance"}


async def test_block_range_reuses_existing_blocks(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await vehicle_block_service.create_block(
            session, vehicle_id=fleet["vehicle_id"], block_date=date(2024, 6, 1)
        )

        result = await vehicle_block_service.block_vehicle_range(
            session,
            vehicle_id=fleet["vehicle_id"],
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 2),
        )

        assert result.success_count == 2
        blocks = await vehicle_block_service.list_blocks(
            session, start_date=date(2024, 6, 1), end_date=date(2024, 6, 2)
        )
        assert len(blocks) == 2
        assert blocks[0].reason == "Unavailable"


async def test_block_range_rejects_inverted_dates(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(ValueError):
            await vehicle_block_service.block_vehicle_range(
                session,
                vehicle_id=fleet["vehicle_id"],
                start_date=date(2024, 6, 3),
                end_date=date(2024, 6, 1),
            )


async def test_single_block_refuses_booked_day(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await _book(session, fleet, date(2024, 6, 1))

        with pytest.raises(ValueError, match="active bookings"):
            await vehicle_block_service.create_block(
                session, vehicle_id=fleet["vehicle_id"], block_date=date(2024, 6, 1)
            )


async def test_deleting_block_reopens_run(fleet, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        block = await vehicle_block_service.create_block(
            session,
            vehicle_id=fleet["vehicle_id"],
            block_date=date(2024, 6, 1),
            reason="Tyres",
        )
        with pytest.raises(ValueError, match="already blocked"):
            await vehicle_block_service.create_block(
                session, vehicle_id=fleet["vehicle_id"], block_date=date(2024, 6, 1)
            )

        await vehicle_block_service.delete_block(session, block=block)
        booking = await _book(session, fleet, date(2024, 6, 1))
        assert booking.status == BookingStatus.CONFIRMED


async def test_block_range_tolerates_concurrent_block(
    fleet, db_url: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add(
            VehicleBlock(
                vehicle_id=fleet["vehicle_id"],
                block_date=date(2024, 6, 2),
                reason="Other desk",
            )
        )
        await session.commit()

        # The day check misses the block, as if it landed just after the check.
        def stale_resolve(snapshot, run_date, vehicle_id, **kwargs):
            return resolve_from_snapshot(
                replace(snapshot, blocks=()), run_date, vehicle_id, **kwargs
            )

        monkeypatch.setattr(vehicle_block_service, "resolve_from_snapshot", stale_resolve)

        result = await vehicle_block_service.block_vehicle_range(
            session,
            vehicle_id=fleet["vehicle_id"],
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 3),
            reason="Service",
        )

        assert result.success_count == 3
        assert result.skipped_dates == []
        blocks = await vehicle_block_service.list_blocks(
            session,
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 3),
            vehicle_id=fleet["vehicle_id"],
        )
        assert [(block.block_date, block.reason) for block in blocks] == [
            (date(2024, 6, 1), "Service"),
            (date(2024, 6, 2), "Other desk"),
            (date(2024, 6, 3), "Service"),
        ]


async def test_blocks_take_the_run_scope(fleet, db_url: str) -> None:
    lock = LocalRunLock(timeout=1.0)
    scoped: list[date] = []

    class RecordingLock:
        def run_scope(self, vehicle_id, run_date):
            scoped.append(run_date)
            return lock.run_scope(vehicle_id, run_date)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await vehicle_block_service.create_block(
            session,
            vehicle_id=fleet["vehicle_id"],
            block_date=date(2024, 6, 1),
            admission=RecordingLock(),
        )
        await vehicle_block_service.block_vehicle_range(
            session,
            vehicle_id=fleet["vehicle_id"],
            start_date=date(2024, 6, 2),
            end_date=date(2024, 6, 3),
            admission=RecordingLock(),
        )

    assert scoped == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
    assert not lock.is_locked(str(fleet["vehicle_id"]), date(2024, 6, 2))
