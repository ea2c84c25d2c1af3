"""Fleet management API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.api import deps
from tourdesk.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from tourdesk.services import fleet_service
from tourdesk.services.errors import NotFoundError

router = APIRouter()


@router.get("", response_model=list[VehicleRead], summary="List vehicles")
async def list_vehicles(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    active_only: bool = False,
) -> list[VehicleRead]:
    vehicles = await fleet_service.list_vehicles(session, active_only=active_only)
    return [VehicleRead.model_validate(obj) for obj in vehicles]


@router.post(
    "",
    response_model=VehicleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add vehicle",
)
async def create_vehicle(
    payload: VehicleCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> VehicleRead:
    try:
        vehicle = await fleet_service.create_vehicle(session, **payload.model_dump())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return VehicleRead.model_validate(vehicle)


@router.get("/{vehicle_id}", response_model=VehicleRead, summary="Get vehicle")
async def get_vehicle(
    vehicle_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> VehicleRead:
    try:
        vehicle = await fleet_service.get_vehicle(session, vehicle_id=vehicle_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return VehicleRead.model_validate(vehicle)


@router.patch("/{vehicle_id}", response_model=VehicleRead, summary="Update vehicle")
async def update_vehicle(
    vehicle_id: uuid.UUID,
    payload: VehicleUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> VehicleRead:
    try:
        vehicle = await fleet_service.get_vehicle(session, vehicle_id=vehicle_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    try:
        updated = await fleet_service.update_vehicle(
            session, vehicle=vehicle, **payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return VehicleRead.model_validate(updated)
