from datetime import datetime

from pydantic import BaseModel

from app.schemas.common import OrmModel


class VehicleStatusSyncOut(OrmModel):
    id: str
    vehicle_id: str
    contract_id: str | None = None
    target_status: str
    trigger: str
    state: str
    attempts: int
    last_error: str | None = None
    created_at: datetime
    applied_at: datetime | None = None


class VehicleStatusSyncListResponse(BaseModel):
    success: bool = True
    syncs: list[VehicleStatusSyncOut]


class VehicleStatusSyncRetryResponse(BaseModel):
    success: bool = True
    applied: int
    pending: int
