"""Pending vehicle status writes left behind by contract transitions."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import CurrentUser, get_current_user
from app.db.base import get_db
from app.schemas.vehicle_sync import (
    VehicleStatusSyncListResponse,
    VehicleStatusSyncOut,
    VehicleStatusSyncRetryResponse,
)
from app.services.status_resolver import StatusResolver
from app.services.vehicle_sync import VehicleStatusSynchronizer

router = APIRouter(prefix="/vehicle-status-syncs", tags=["Vehicle status sync"])


def _svc(session: AsyncSession, user: CurrentUser) -> VehicleStatusSynchronizer:
    return VehicleStatusSynchronizer(session, user.user_id, StatusResolver(session))


@router.get("", response_model=VehicleStatusSyncListResponse)
async def list_pending_syncs(
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    rows = await _svc(session, user).list_pending()
    return VehicleStatusSyncListResponse(
        syncs=[VehicleStatusSyncOut.model_validate(r) for r in rows]
    )


@router.post("/retry", response_model=VehicleStatusSyncRetryResponse)
async def retry_pending_syncs(
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    outcome = await _svc(session, user).retry_pending()
    return VehicleStatusSyncRetryResponse(applied=outcome.applied, pending=outcome.pending)
