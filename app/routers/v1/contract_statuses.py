from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import CurrentUser, get_current_user
from app.db.base import get_db
from app.schemas.lookup import StatusListResponse, StatusOut
from app.services.status_resolver import StatusResolver

router = APIRouter(prefix="/contract-statuses", tags=["Contract statuses"])


@router.get("", response_model=StatusListResponse)
async def list_contract_statuses(
    session: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    """Active contract statuses ordered by code (for filters and badges)."""
    rows = await StatusResolver(session).active_contract_statuses()
    return StatusListResponse(statuses=[StatusOut.model_validate(r) for r in rows])
