"""Contract Pydantic schemas (request DTOs and response models).

Request fields are all optional at the schema level so the service can
report the first missing required field by name.
"""


from datetime import date, datetime

from pydantic import BaseModel

from app.core.pagination import PageMeta
from app.core.response import SyncEnvelope
from app.schemas.common import CamelModel, OrmModel


class ContractCreate(CamelModel):
    start_date: date | None = None
    end_date: date | None = None
    selected_vehicle_id: str | None = None
    selected_customer_id: str | None = None
    branch_id: str | None = None
    daily_rental_rate: float | None = None
    hourly_delay_rate: float | None = None
    current_km: int | None = None
    rental_days: int | None = None
    permitted_daily_km: int | None = None
    excess_km_rate: float | None = None
    payment_method: str | None = None
    total_amount: float | None = None
    deposit: float | None = None
    # Manual numbering; generated when omitted
    contract_number: str | None = None
    tajeer_number: str | None = None


class ContractUpdate(CamelModel):
    """Editable contract details.

    Status and vehicle only change through the lifecycle operations, so
    unknown fields (statusId, selectedVehicleId, ...) are rejected.
    """

    model_config = {"extra": "forbid"}

    start_date: date | None = None
    end_date: date | None = None
    selected_customer_id: str | None = None
    branch_id: str | None = None
    daily_rental_rate: float | None = None
    hourly_delay_rate: float | None = None
    current_km: int | None = None
    rental_days: int | None = None
    permitted_daily_km: int | None = None
    excess_km_rate: float | None = None
    payment_method: str | None = None
    total_amount: float | None = None
    deposit: float | None = None
    tajeer_number: str | None = None


class CancelRequest(CamelModel):
    cancel_reason: str | None = None
    cancel_comments: str | None = None


class CloseRequest(CamelModel):
    close_reason: str | None = None
    close_comments: str | None = None


class HoldRequest(CamelModel):
    hold_reason: str | None = None
    hold_comments: str | None = None


class ContractExtend(CamelModel):
    extension_type: str | None = None  # "duration" | "fees"
    fee_amount: float | int | str | None = None
    duration_days: int | float | str | None = None
    payment_method: str | None = None


class ContractOut(OrmModel):
    id: str
    user_id: str
    contract_number: str
    tajeer_number: str | None = None
    start_date: date
    end_date: date
    selected_customer_id: str
    selected_vehicle_id: str
    branch_id: str
    status_id: str
    status_name: str | None = None
    daily_rental_rate: float
    hourly_delay_rate: float
    current_km: int
    rental_days: int
    permitted_daily_km: int
    excess_km_rate: float
    payment_method: str
    total_amount: float
    deposit: float | None = None
    cancel_reason: str | None = None
    cancel_comments: str | None = None
    cancel_date: datetime | None = None
    close_reason: str | None = None
    close_comments: str | None = None
    close_date: datetime | None = None
    hold_reason: str | None = None
    hold_comments: str | None = None
    hold_date: datetime | None = None
    extension_type: str | None = None
    extension_fee_amount: float | None = None
    extension_duration_days: int | None = None
    extension_payment_method: str | None = None
    extension_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ContractResponse(SyncEnvelope):
    contract: ContractOut


class ContractListResponse(BaseModel):
    success: bool = True
    contracts: list[ContractOut]
    pagination: PageMeta
