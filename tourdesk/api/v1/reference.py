"""Market source and agent API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.api import deps
from tourdesk.schemas.reference import (
    AgentCreate,
    AgentRead,
    AgentUpdate,
    MarketSourceCreate,
    MarketSourceRead,
    MarketSourceUpdate,
)
from tourdesk.services import reference_service
from tourdesk.services.errors import NotFoundError

router = APIRouter()


def _duplicate_name() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="Name already exists"
    )


@router.get(
    "/market-sources",
    response_model=list[MarketSourceRead],
    summary="List market sources",
)
async def list_market_sources(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    active_only: bool = False,
) -> list[MarketSourceRead]:
    sources = await reference_service.list_market_sources(
        session, active_only=active_only
    )
    return [MarketSourceRead.model_validate(obj) for obj in sources]


@router.post(
    "/market-sources",
    response_model=MarketSourceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create market source",
)
async def create_market_source(
    payload: MarketSourceCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> MarketSourceRead:
    try:
        source = await reference_service.create_market_source(
            session, **payload.model_dump()
        )
    except IntegrityError as exc:
        raise _duplicate_name() from exc
    return MarketSourceRead.model_validate(source)


@router.patch(
    "/market-sources/{market_source_id}",
    response_model=MarketSourceRead,
    summary="Update market source",
)
async def update_market_source(
    market_source_id: uuid.UUID,
    payload: MarketSourceUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> MarketSourceRead:
    try:
        source = await reference_service.get_market_source(
            session, market_source_id=market_source_id
        )
        updated = await reference_service.update_market_source(
            session, source=source, **payload.model_dump(exclude_unset=True)
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise _duplicate_name() from exc
    return MarketSourceRead.model_validate(updated)


@router.get("/agents", response_model=list[AgentRead], summary="List agents")
async def list_agents(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    active_only: bool = False,
) -> list[AgentRead]:
    agents = await reference_service.list_agents(session, active_only=active_only)
    return [AgentRead.model_validate(obj) for obj in agents]


@router.post(
    "/agents",
    response_model=AgentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create agent",
)
async def create_agent(
    payload: AgentCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AgentRead:
    try:
        agent = await reference_service.create_agent(session, **payload.model_dump())
    except IntegrityError as exc:
        raise _duplicate_name() from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return AgentRead.model_validate(agent)


@router.patch("/agents/{agent_id}", response_model=AgentRead, summary="Update agent")
async def update_agent(
    agent_id: uuid.UUID,
    payload: AgentUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AgentRead:
    try:
        agent = await reference_service.get_agent(session, agent_id=agent_id)
        updated = await reference_service.update_agent(
            session, agent=agent, **payload.model_dump(exclude_unset=True)
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise _duplicate_name() from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return AgentRead.model_validate(updated)
