"""Vehicle block management."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.domain.blocking import (
    DEFAULT_BLOCK_REASON,
    BlockRangeResult,
    plan_block_range,
)
from tourdesk.domain.records import TourRun
from tourdesk.domain.run_state import resolve_from_snapshot
from tourdesk.models import VehicleBlock
from tourdesk.services import fleet_service, snapshot_service
from tourdesk.services.errors import NotFoundError
from tourdesk.services.run_locks import AdmissionTransaction, get_admission_transaction

logger = logging.getLogger(__name__)


async def list_blocks(
    session: AsyncSession,
    *,
    start_date: date,
    end_date: date,
    vehicle_id: uuid.UUID | None = None,
) -> Sequence[VehicleBlock]:
    stmt = (
        select(VehicleBlock)
        .where(
            VehicleBlock.block_date >= start_date,
            VehicleBlock.block_date <= end_date,
        )
        .order_by(VehicleBlock.block_date.asc())
    )
    if vehicle_id is not None:
        stmt = stmt.where(VehicleBlock.vehicle_id == vehicle_id)
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_block(session: AsyncSession, *, block_id: uuid.UUID) -> VehicleBlock:
    block = await session.get(VehicleBlock, block_id)
    if block is None:
        raise NotFoundError("Vehicle block not found")
    return block


async def _resolve_day(
    session: AsyncSession, *, vehicle_id: uuid.UUID, block_date: date
) -> TourRun:
    snapshot = await snapshot_service.load_snapshot(
        session, start_date=block_date, end_date=block_date, vehicle_id=vehicle_id
    )
    return resolve_from_snapshot(snapshot, block_date, str(vehicle_id))


async def create_block(
    session: AsyncSession,
    *,
    vehicle_id: uuid.UUID,
    block_date: date,
    reason: str | None = None,
    admission: AdmissionTransaction | None = None,
) -> VehicleBlock:
    """Block a single day; refuses days that already carry active bookings."""
    vehicle = await fleet_service.get_vehicle(session, vehicle_id=vehicle_id)
    transaction = admission or get_admission_transaction()
    async with transaction.run_scope(str(vehicle.id), block_date):
        run = await _resolve_day(session, vehicle_id=vehicle.id, block_date=block_date)
        if run.is_blocked:
            raise ValueError("Vehicle is already blocked on this date")
        if run.active_bookings:
            raise ValueError("Vehicle has active bookings on this date")

        block = VehicleBlock(
            vehicle_id=vehicle.id,
            block_date=block_date,
            reason=(reason or "").strip() or DEFAULT_BLOCK_REASON,
        )
        session.add(block)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise
    await session.refresh(block)
    return block


async def delete_block(session: AsyncSession, *, block: VehicleBlock) -> None:
    await session.delete(block)
    await session.commit()


async def block_vehicle_range(
    session: AsyncSession,
    *,
    vehicle_id: uuid.UUID,
    start_date: date,
    end_date: date,
    reason: str | None = None,
    admission: AdmissionTransaction | None = None,
) -> BlockRangeResult:
    """Block every free day of a range.

    Each day is re-checked and committed under its own run scope, so a failure
    part-way leaves the earlier days blocked. Days that are already blocked,
    including ones another writer blocks concurrently, count as blocked
    without a second row being written.
    """
    if start_date > end_date:
        raise ValueError("start_date must be before or equal to end_date")
    vehicle = await fleet_service.get_vehicle(session, vehicle_id=vehicle_id)
    target_id = vehicle.id
    snapshot = await snapshot_service.load_snapshot(
        session, start_date=start_date, end_date=end_date, vehicle_id=target_id
    )
    plan = plan_block_range(
        str(target_id), start_date, end_date, reason, snapshot.bookings
    )

    transaction = admission or get_admission_transaction()
    result = BlockRangeResult(skipped_dates=list(plan.skipped_dates))
    for planned in plan.blocks:
        async with transaction.run_scope(str(target_id), planned.date):
            run = await _resolve_day(
                session, vehicle_id=target_id, block_date=planned.date
            )
            if run.active_bookings:
                # Booked after the range was planned.
                result.skipped_dates.append(planned.date)
                continue
            if not run.is_blocked:
                session.add(
                    VehicleBlock(
                        id=uuid.UUID(planned.id),
                        vehicle_id=target_id,
                        block_date=planned.date,
                        reason=planned.reason,
                    )
                )
                try:
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    logger.info(
                        "Vehicle %s was blocked on %s by another writer",
                        target_id,
                        planned.date,
                    )
        result.success_count += 1

    result.skipped_dates.sort()
    logger.info(
        "Blocked vehicle %s for %d day(s), skipped %d occupied day(s)",
        target_id,
        result.success_count,
        len(result.skipped_dates),
    )
    return result
