"""Market source and agent reference data."""
from __future__ import annotations

import uuid
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.models import Agent, CommissionType, MarketSource, SourceCategory
from tourdesk.services.errors import NotFoundError


async def _commit_named(session: AsyncSession, obj: MarketSource | Agent) -> None:
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(obj)


async def list_market_sources(
    session: AsyncSession, *, active_only: bool = False
) -> Sequence[MarketSource]:
    stmt = select(MarketSource).order_by(MarketSource.created_at.asc())
    if active_only:
        stmt = stmt.where(MarketSource.is_active.is_(True))
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_market_source(
    session: AsyncSession, *, market_source_id: uuid.UUID
) -> MarketSource:
    source = await session.get(MarketSource, market_source_id)
    if source is None:
        raise NotFoundError("Market source not found")
    return source


async def create_market_source(
    session: AsyncSession,
    *,
    name: str,
    category: SourceCategory = SourceCategory.DIRECT,
    is_active: bool = True,
) -> MarketSource:
    source = MarketSource(name=name.strip(), category=category, is_active=is_active)
    session.add(source)
    await _commit_named(session, source)
    return source


async def update_market_source(
    session: AsyncSession,
    *,
    source: MarketSource,
    name: str | None = None,
    category: SourceCategory | None = None,
    is_active: bool | None = None,
) -> MarketSource:
    """Rename, recategorise or retire a source.

    Retired sources stay on the bookings that already use them.
    """
    if name is not None:
        source.name = name.strip()
    if category is not None:
        source.category = category
    if is_active is not None:
        source.is_active = is_active
    await _commit_named(session, source)
    return source


def _check_commission(commission_type: CommissionType, value: Decimal) -> None:
    if value < 0:
        raise ValueError("Commission value cannot be negative")
    if commission_type is CommissionType.PERCENTAGE and value > 100:
        raise ValueError("Percentage commission cannot exceed 100")


async def list_agents(
    session: AsyncSession, *, active_only: bool = False
) -> Sequence[Agent]:
    stmt = select(Agent).order_by(Agent.name.asc())
    if active_only:
        stmt = stmt.where(Agent.is_active.is_(True))
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_agent(session: AsyncSession, *, agent_id: uuid.UUID) -> Agent:
    agent = await session.get(Agent, agent_id)
    if agent is None:
        raise NotFoundError("Agent not found")
    return agent


async def create_agent(
    session: AsyncSession,
    *,
    name: str,
    has_commission: bool = False,
    commission_type: CommissionType = CommissionType.PERCENTAGE,
    commission_value: Decimal = Decimal("0"),
    is_active: bool = True,
) -> Agent:
    _check_commission(commission_type, commission_value)
    agent = Agent(
        name=name.strip(),
        has_commission=has_commission,
        commission_type=commission_type,
        commission_value=commission_value,
        is_active=is_active,
    )
    session.add(agent)
    await _commit_named(session, agent)
    return agent


async def update_agent(
    session: AsyncSession,
    *,
    agent: Agent,
    name: str | None = None,
    has_commission: bool | None = None,
    commission_type: CommissionType | None = None,
    commission_value: Decimal | None = None,
    is_active: bool | None = None,
) -> Agent:
    _check_commission(
        commission_type or agent.commission_type,
        commission_value if commission_value is not None else agent.commission_value,
    )
    if name is not None:
        agent.name = name.strip()
    if has_commission is not None:
        agent.has_commission = has_commission
    if commission_type is not None:
        agent.commission_type = commission_type
    if commission_value is not None:
        agent.commission_value = commission_value
    if is_active is not None:
        agent.is_active = is_active
    await _commit_named(session, agent)
    return agent
