"""Guest profile API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.api import deps
from tourdesk.schemas.guest import GuestCreate, GuestRead, GuestUpdate
from tourdesk.services import guest_service
from tourdesk.services.errors import NotFoundError

router = APIRouter()


@router.get("", response_model=list[GuestRead], summary="List guests")
async def list_guests(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    q: str | None = Query(default=None, description="Name, phone or e-mail fragment"),
    skip: int = 0,
    limit: int = 50,
) -> list[GuestRead]:
    guests = await guest_service.list_guests(
        session, search=q, skip=skip, limit=min(limit, 100)
    )
    return [GuestRead.model_validate(obj) for obj in guests]


@router.post(
    "",
    response_model=GuestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create guest",
)
async def create_guest(
    payload: GuestCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> GuestRead:
    try:
        guest = await guest_service.create_guest(session, **payload.model_dump())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return GuestRead.model_validate(guest)


@router.get("/{guest_id}", response_model=GuestRead, summary="Get guest")
async def get_guest(
    guest_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> GuestRead:
    try:
        guest = await guest_service.get_guest(session, guest_id=guest_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return GuestRead.model_validate(guest)


@router.patch("/{guest_id}", response_model=GuestRead, summary="Update guest")
async def update_guest(
    guest_id: uuid.UUID,
    payload: GuestUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> GuestRead:
    try:
        guest = await guest_service.get_guest(session, guest_id=guest_id)
        updated = await guest_service.update_guest(
            session, guest=guest, **payload.model_dump(exclude_unset=True)
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return GuestRead.model_validate(updated)


@router.delete(
    "/{guest_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete guest",
)
async def delete_guest(
    guest_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Response:
    try:
        guest = await guest_service.get_guest(session, guest_id=guest_id)
        await guest_service.delete_guest(session, guest=guest)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
