"""Tour options and rate card API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.api import deps
from tourdesk.schemas.tour import (
    RateCreate,
    RateRead,
    RateUpdate,
    TourOptionCreate,
    TourOptionRead,
)
from tourdesk.services import fleet_service
from tourdesk.services.errors import NotFoundError

router = APIRouter()


@router.get("/tours", response_model=list[TourOptionRead], summary="List tour options")
async def list_tour_options(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[TourOptionRead]:
    tour_options = await fleet_service.list_tour_options(session)
    return [TourOptionRead.model_validate(obj) for obj in tour_options]


@router.post(
    "/tours",
    response_model=TourOptionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create tour option",
)
async def create_tour_option(
    payload: TourOptionCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> TourOptionRead:
    try:
        tour_option = await fleet_service.create_tour_option(
            session, **payload.model_dump()
        )
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tour option name already exists",
        ) from exc
    return TourOptionRead.model_validate(tour_option)


@router.get("/rates", response_model=list[RateRead], summary="List rates")
async def list_rates(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[RateRead]:
    rates = await fleet_service.list_rates(session)
    return [RateRead.model_validate(obj) for obj in rates]


@router.post(
    "/rates",
    response_model=RateRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create rate",
)
async def create_rate(
    payload: RateCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> RateRead:
    try:
        rate = await fleet_service.create_rate(session, **payload.model_dump())
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return RateRead.model_validate(rate)


@router.patch("/rates/{rate_id}", response_model=RateRead, summary="Update rate")
async def update_rate(
    rate_id: uuid.UUID,
    payload: RateUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> RateRead:
    try:
        rate = await fleet_service.get_rate(session, rate_id=rate_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    updated = await fleet_service.update_rate(
        session, rate=rate, **payload.model_dump(exclude_unset=True)
    )
    return RateRead.model_validate(updated)
