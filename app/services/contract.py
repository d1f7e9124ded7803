"""Contract lifecycle service: create / edit / cancel / close / hold / extend / delete.

Every transition follows the same order: validate input, resolve the lookup
statuses it needs, load the caller's contract, apply the contract write
(the primary write, which fails the request when it fails), then the
vehicle status write (best effort, reported as a warning).

Rule: No FastAPI here. Routers shape HTTP, this module owns the rules.
"""


import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StoreWriteError,
    ValidationError,
)
from app.core.pagination import PaginationParams
from app.domain.contract import Contract
from app.domain.enums import (
    TERMINAL_CONTRACT_STATUSES,
    ContractStatusName,
    ExtensionType,
    VehicleStatusName,
)
from app.repositories.audit import AuditRepository
from app.repositories.contract import ContractRepository
from app.schemas.contract import ContractCreate, ContractExtend, ContractUpdate
from app.services import contract_rules
from app.services.status_resolver import StatusResolver
from app.services.vehicle_sync import VehicleStatusSynchronizer

logger = logging.getLogger(__name__)


@dataclass
class ContractResult:
    contract: Contract | None
    status_name: str | None = None
    vehicle_status_sync_warning: str | None = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: Any) -> Any:
    return value.isoformat() if isinstance(value, (date, datetime)) else value


class ContractService:
    def __init__(self, session: AsyncSession, user_id: str):
        self._user_id = user_id
        self._repo = ContractRepository(session, user_id)
        self._audit = AuditRepository(session, user_id)
        self._statuses = StatusResolver(session)
        self._vehicles = VehicleStatusSynchronizer(session, user_id, self._statuses)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, contract_id: str) -> Contract:
        contract = await self._repo.get_by_id(contract_id)
        if not contract:
            raise NotFoundError("Contract", contract_id)
        return contract

    async def _ensure_not_terminal(self, contract: Contract, action: str) -> str | None:
        current = await self._statuses.contract_status_name(contract.status_id)
        if current in TERMINAL_CONTRACT_STATUSES:
            raise ConflictError(f"Contract is already {current.lower()} and cannot be {action}")
        return current

    async def _write(self, contract_id: str, action: str, **patch: Any) -> Contract:
        try:
            updated = await self._repo.update(contract_id, **patch)
        except SQLAlchemyError as exc:
            logger.error("Contract %s %s failed: %s", contract_id, action, exc)
            raise StoreWriteError(f"Failed to {action} contract", details=str(exc)) from exc
        if updated is None:
            raise NotFoundError("Contract", contract_id)
        return updated

    async def _result(self, contract: Contract, warning: str | None = None) -> ContractResult:
        return ContractResult(
            contract=contract,
            status_name=await self._statuses.contract_status_name(contract.status_id),
            vehicle_status_sync_warning=warning,
        )

    async def _next_contract_number(self) -> str:
        attempts = max(1, settings.contract_number_max_attempts)
        for _ in range(attempts):
            number = contract_rules.generate_contract_number()
            if not await self._repo.contract_number_exists(number):
                return number
            logger.warning("Contract number %s already in use; regenerating", number)
        raise StoreWriteError(
            f"Could not generate a unique contract number after {attempts} attempts"
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_contract(self, contract_id: str) -> ContractResult:
        return await self._result(await self._load(contract_id))

    async def list_contracts(
        self,
        pagination: PaginationParams,
        search: str | None = None,
        status: str | None = None,
        vehicle_id: str | None = None,
        customer_id: str | None = None,
    ) -> tuple[list[ContractResult], int]:
        status_id = None
        if status:
            status_id = await self._statuses.find_contract_status_by_name(status)
            if status_id is None:
                raise ValidationError(f"Invalid status: {status}")
        items, total = await self._repo.search(
            offset=pagination.offset,
            limit=pagination.limit,
            search=search.strip() if search else None,
            status_id=status_id,
            vehicle_id=vehicle_id or None,
            customer_id=customer_id or None,
        )
        return [await self._result(c) for c in items], total

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def create_contract(self, data: ContractCreate) -> ContractResult:
        payload = data.model_dump()
        contract_rules.require_fields(payload)

        status_id = await self._statuses.resolve_default_contract_status()
        contract_number = payload.pop("contract_number", None) or await self._next_contract_number()

        try:
            contract = await self._repo.create(
                **payload,
                contract_number=contract_number,
                status_id=status_id,
            )
        except SQLAlchemyError as exc:
            logger.error("Contract insert failed: %s", exc)
            raise StoreWriteError(f"Failed to create contract: {exc}", details=str(exc)) from exc

        logger.info("Contract %s (%s) created by %s", contract.id, contract_number, self._user_id)
        self._audit.record(
            "contract.created", "contract", contract.id,
            new_value={"contract_number": contract_number, "status_id": status_id},
        )
        warning = await self._vehicles.sync(
            contract.selected_vehicle_id,
            VehicleStatusName.IN_CONTRACT,
            contract_id=contract.id,
            trigger="create",
        )
        return await self._result(contract, warning)

    async def update_contract(self, contract_id: str, data: ContractUpdate) -> ContractResult:
        patch = data.model_dump(exclude_unset=True)
        if not patch:
            raise ValidationError("No contract fields to update")
        contract_rules.require_fields(
            patch, [f for f in contract_rules.REQUIRED_CONTRACT_FIELDS if f in patch]
        )

        contract = await self._load(contract_id)
        await self._ensure_not_terminal(contract, "edited")
        previous = {field: _iso(getattr(contract, field)) for field in patch}

        updated = await self._write(contract_id, "update", **patch)
        logger.info("Contract %s updated by %s: %s", contract_id, self._user_id, sorted(patch))
        self._audit.record(
            "contract.updated", "contract", contract_id,
            old_value=previous,
            new_value={field: _iso(value) for field, value in patch.items()},
        )
        return await self._result(updated)

    async def _terminate(
        self,
        contract_id: str,
        target: ContractStatusName,
        prefix: str,
        verb: str,
        reason: str | None,
        comments: str | None,
    ) -> ContractResult:
        reason = contract_rules.require_reason(reason, prefix.capitalize())
        status_id = await self._statuses.resolve_contract_status(target)
        contract = await self._load(contract_id)
        previous = await self._ensure_not_terminal(contract, verb)
        vehicle_id = contract.selected_vehicle_id

        now = _now()
        updated = await self._write(
            contract_id,
            prefix,
            status_id=status_id,
            updated_at=now,
            **{
                f"{prefix}_reason": reason,
                f"{prefix}_comments": comments or None,
                f"{prefix}_date": now,
            },
        )
        logger.info("Contract %s %s by %s", contract_id, verb, self._user_id)
        self._audit.record(
            f"contract.{verb}", "contract", contract_id,
            old_value={"status": previous},
            new_value={"status": target.value, "reason": reason},
        )

        warning = None
        if vehicle_id:
            warning = await self._vehicles.sync(
                vehicle_id, VehicleStatusName.AVAILABLE, contract_id=contract_id, trigger=prefix
            )
        return await self._result(updated, warning)

    async def cancel_contract(
        self, contract_id: str, reason: str | None, comments: str | None = None
    ) -> ContractResult:
        return await self._terminate(
            contract_id, ContractStatusName.CANCELLED, "cancel", "cancelled", reason, comments
        )

    async def close_contract(
        self, contract_id: str, reason: str | None, comments: str | None = None
    ) -> ContractResult:
        return await self._terminate(
            contract_id, ContractStatusName.CLOSED, "close", "closed", reason, comments
        )

    async def hold_contract(
        self, contract_id: str, reason: str | None, comments: str | None = None
    ) -> ContractResult:
        # The vehicle stays "In Contract" while the contract is held
        reason = contract_rules.require_reason(reason, "Hold")
        status_id = await self._statuses.resolve_contract_status(ContractStatusName.ON_HOLD)
        contract = await self._load(contract_id)
        previous = await self._ensure_not_terminal(contract, "put on hold")

        now = _now()
        updated = await self._write(
            contract_id,
            "hold",
            status_id=status_id,
            hold_reason=reason,
            hold_comments=comments or None,
            hold_date=now,
            updated_at=now,
        )
        logger.info("Contract %s put on hold by %s", contract_id, self._user_id)
        self._audit.record(
            "contract.held", "contract", contract_id,
            old_value={"status": previous},
            new_value={"status": ContractStatusName.ON_HOLD.value, "reason": reason},
        )
        return await self._result(updated)

    async def extend_contract(self, contract_id: str, data: ContractExtend) -> ContractResult:
        kind = contract_rules.validate_extension_request(
            data.extension_type, data.fee_amount, data.duration_days
        )
        contract = await self._load(contract_id)
        await self._ensure_not_terminal(contract, "extended")

        old_end_date = contract.end_date
        extension = contract_rules.compute_extended_end_date(
            old_end_date,
            kind,
            duration_days=data.duration_days,
            fee_amount=data.fee_amount,
            daily_rate=contract.daily_rental_rate,
        )
        logger.debug(
            "Extending contract %s by %d day(s): %s -> %s",
            contract_id, extension.days_added, old_end_date, extension.new_end_date,
        )

        fee = None
        if kind is ExtensionType.FEES:
            fee = float(contract_rules.parse_amount(data.fee_amount, "feeAmount"))

        now = _now()
        updated = await self._write(
            contract_id,
            "extend",
            end_date=extension.new_end_date,
            extension_type=kind.value,
            extension_fee_amount=fee,
            extension_duration_days=extension.days_added,
            extension_payment_method=data.payment_method,
            extension_date=now,
            updated_at=now,
        )
        logger.info(
            "Contract %s extended to %s by %s", contract_id, extension.new_end_date, self._user_id
        )
        self._audit.record(
            "contract.extended", "contract", contract_id,
            old_value={"end_date": _iso(old_end_date)},
            new_value={
                "end_date": _iso(extension.new_end_date),
                "extension_type": kind.value,
                "days_added": extension.days_added,
            },
        )
        return await self._result(updated)

    async def delete_contract(self, contract_id: str) -> ContractResult:
        contract = await self._load(contract_id)
        vehicle_id = contract.selected_vehicle_id
        snapshot = {"contract_number": contract.contract_number, "status_id": contract.status_id}

        try:
            deleted = await self._repo.delete(contract_id)
        except SQLAlchemyError as exc:
            logger.error("Contract %s delete failed: %s", contract_id, exc)
            raise StoreWriteError("Failed to delete contract", details=str(exc)) from exc
        if not deleted:
            # Ownership is re-checked by the scoped DELETE itself
            raise ForbiddenError("Contract not found or access denied")

        logger.info("Contract %s deleted by %s", contract_id, self._user_id)
        self._audit.record("contract.deleted", "contract", contract_id, old_value=snapshot)

        warning = None
        if vehicle_id:
            warning = await self._vehicles.sync(
                vehicle_id, VehicleStatusName.AVAILABLE, contract_id=contract_id, trigger="delete"
            )
        return ContractResult(contract=None, vehicle_status_sync_warning=warning)
