"""Vehicle block API."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.api import deps
from tourdesk.schemas.block import (
    BlockRangeRequest,
    BlockRangeResponse,
    VehicleBlockCreate,
    VehicleBlockRead,
)
from tourdesk.services import vehicle_block_service
from tourdesk.services.errors import NotFoundError, RunLockTimeout
from tourdesk.services.run_locks import AdmissionTransaction

router = APIRouter()


@router.get("", response_model=list[VehicleBlockRead], summary="List vehicle blocks")
async def list_blocks(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    start_date: date,
    end_date: date,
    vehicle_id: uuid.UUID | None = None,
) -> list[VehicleBlockRead]:
    blocks = await vehicle_block_service.list_blocks(
        session, start_date=start_date, end_date=end_date, vehicle_id=vehicle_id
    )
    return [VehicleBlockRead.model_validate(obj) for obj in blocks]


@router.post(
    "",
    response_model=VehicleBlockRead,
    status_code=status.HTTP_201_CREATED,
    summary="Block a vehicle for one day",
)
async def create_block(
    payload: VehicleBlockCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    admission: Annotated[AdmissionTransaction, Depends(deps.get_admission)],
) -> VehicleBlockRead:
    try:
        block = await vehicle_block_service.create_block(
            session, admission=admission, **payload.model_dump()
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except RunLockTimeout as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Vehicle is already blocked on this date",
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return VehicleBlockRead.model_validate(block)


@router.post(
    "/range",
    response_model=BlockRangeResponse,
    summary="Block a vehicle across a date range",
)
async def block_range(
    payload: BlockRangeRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    admission: Annotated[AdmissionTransaction, Depends(deps.get_admission)],
) -> BlockRangeResponse:
    try:
        result = await vehicle_block_service.block_vehicle_range(
            session, admission=admission, **payload.model_dump()
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except RunLockTimeout as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return BlockRangeResponse(
        success_count=result.success_count, skipped_dates=result.skipped_dates
    )


@router.delete(
    "/{block_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove a vehicle block",
)
async def delete_block(
    block_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Response:
    try:
        block = await vehicle_block_service.get_block(session, block_id=block_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    await vehicle_block_service.delete_block(session, block=block)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
