"""Contract lifecycle router: thin HTTP layer over ContractService.

Pattern:
  1. Inject DB session + current user via Depends
  2. Instantiate the service with (session, user.user_id)
  3. Call the service and wrap the result in the response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import PaginationParams
from app.core.response import SyncEnvelope, page_meta
from app.core.security import CurrentUser, get_current_user
from app.db.base import get_db
from app.schemas.contract import (
    CancelRequest,
    CloseRequest,
    ContractCreate,
    ContractExtend,
    ContractListResponse,
    ContractOut,
    ContractResponse,
    ContractUpdate,
    HoldRequest,
)
from app.services.contract import ContractResult, ContractService

router = APIRouter(prefix="/contracts", tags=["Contracts"])


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _svc(session: AsyncSession, user: CurrentUser) -> ContractService:
    return ContractService(session, user.user_id)


def _out(result: ContractResult) -> ContractOut:
    return ContractOut.model_validate(result.contract).model_copy(
        update={"status_name": result.status_name}
    )


def _envelope(result: ContractResult, message: str | None = None) -> ContractResponse:
    return ContractResponse(
        message=message,
        contract=_out(result),
        vehicle_status_sync_warning=result.vehicle_status_sync_warning,
    )


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=ContractListResponse)
async def list_contracts(
    search: Optional[str] = Query(default=None, description="Contract or Tajeer number"),
    filter_status: Optional[str] = Query(default=None, alias="status", description="Status name"),
    vehicle_id: Optional[str] = Query(default=None, alias="vehicleId", description="Contracts for one vehicle"),
    customer_id: Optional[str] = Query(default=None, alias="customerId", description="Contracts for one customer"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """List the caller's contracts, newest first."""
    results, total = await _svc(session, user).list_contracts(
        pagination,
        search=search,
        status=filter_status,
        vehicle_id=vehicle_id,
        customer_id=customer_id,
    )
    return ContractListResponse(
        contracts=[_out(r) for r in results],
        pagination=page_meta(total, pagination.page, pagination.limit),
    )


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    body: ContractCreate,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    result = await _svc(session, user).create_contract(body)
    return _envelope(result, "Contract created successfully")


@router.get("/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: str,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    result = await _svc(session, user).get_contract(contract_id)
    return _envelope(result)


@router.put("/{contract_id}", response_model=ContractResponse)
async def update_contract(
    contract_id: str,
    body: ContractUpdate,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    result = await _svc(session, user).update_contract(contract_id, body)
    return _envelope(result, "Contract updated successfully")


@router.post("/{contract_id}/cancel", response_model=ContractResponse)
async def cancel_contract(
    contract_id: str,
    body: CancelRequest,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    result = await _svc(session, user).cancel_contract(
        contract_id, body.cancel_reason, body.cancel_comments
    )
    return _envelope(result, "Contract has been cancelled successfully")


@router.post("/{contract_id}/close", response_model=ContractResponse)
async def close_contract(
    contract_id: str,
    body: CloseRequest,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    result = await _svc(session, user).close_contract(
        contract_id, body.close_reason, body.close_comments
    )
    return _envelope(result, "Contract has been closed successfully")


@router.post("/{contract_id}/hold", response_model=ContractResponse)
async def hold_contract(
    contract_id: str,
    body: HoldRequest,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    result = await _svc(session, user).hold_contract(
        contract_id, body.hold_reason, body.hold_comments
    )
    return _envelope(result, "Contract has been put on hold successfully")


@router.post("/{contract_id}/extend", response_model=ContractResponse)
async def extend_contract(
    contract_id: str,
    body: ContractExtend,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    result = await _svc(session, user).extend_contract(contract_id, body)
    return _envelope(result, "Contract extended successfully")


@router.delete("/{contract_id}", response_model=SyncEnvelope)
async def delete_contract(
    contract_id: str,
    session: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    result = await _svc(session, user).delete_contract(contract_id)
    return SyncEnvelope(
        message="Contract deleted successfully",
        vehicle_status_sync_warning=result.vehicle_status_sync_warning,
    )
