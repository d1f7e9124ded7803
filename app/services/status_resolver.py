"""Resolve status display names to store-assigned lookup ids.

One resolver lives for one request; results are memoised on the instance so
a transition never reads the same lookup row twice, while a renamed or
re-seeded status is picked up by the next request.
"""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConfigurationError
from app.domain.enums import ContractStatusName, VehicleStatusName
from app.domain.lookup import ContractStatus, VehicleStatus
from app.repositories.lookup import LookupRepository

logger = logging.getLogger(__name__)


class StatusResolver:
    def __init__(self, session: AsyncSession):
        self._repo = LookupRepository(session)
        self._ids: dict[tuple[str, str], str] = {}
        self._names: dict[str, str] = {}

    def _remember(self, table: str, row) -> str:
        self._ids[(table, row.name)] = row.id
        if table == ContractStatus.__tablename__:
            self._names[row.id] = row.name
        return row.id

    async def _resolve(self, model, name: str) -> str:
        key = (model.__tablename__, name)
        if key in self._ids:
            return self._ids[key]
        row = await self._repo.find_by_name(model, name)
        if row is None:
            logger.error("Lookup %s has no active status named %r", model.__tablename__, name)
            raise ConfigurationError(f"{name} status not found")
        return self._remember(model.__tablename__, row)

    async def resolve_contract_status(self, name: ContractStatusName) -> str:
        return await self._resolve(ContractStatus, ContractStatusName(name).value)

    async def resolve_vehicle_status(self, name: VehicleStatusName) -> str:
        return await self._resolve(VehicleStatus, VehicleStatusName(name).value)

    async def resolve_default_contract_status(self) -> str:
        """Status for new contracts.

        "Active" if present and active, else the first active status by
        code, else the first status by code regardless of ``is_active``.
        """
        row = await self._repo.find_by_name(ContractStatus, ContractStatusName.ACTIVE.value)
        if row is None:
            row = await self._repo.first_by_code(ContractStatus, active_only=True)
            if row is None:
                row = await self._repo.first_by_code(ContractStatus, active_only=False)
            if row is not None:
                logger.warning(
                    "No active 'Active' contract status; defaulting new contracts to %r", row.name
                )
        if row is None:
            raise ConfigurationError("No contract statuses are configured")
        return self._remember(ContractStatus.__tablename__, row)

    async def contract_status_name(self, status_id: str | None) -> str | None:
        if not status_id:
            return None
        if status_id not in self._names:
            row = await self._repo.get_by_id(ContractStatus, status_id)
            if row is None:
                return None
            self._remember(ContractStatus.__tablename__, row)
        return self._names[status_id]

    async def find_contract_status_by_name(self, name: str) -> str | None:
        """Id for an arbitrary (user supplied) status name, or None."""
        key = (ContractStatus.__tablename__, name)
        if key not in self._ids:
            row = await self._repo.find_by_name(ContractStatus, name, active_only=False)
            if row is None:
                return None
            self._remember(ContractStatus.__tablename__, row)
        return self._ids[key]

    async def active_contract_statuses(self) -> list[ContractStatus]:
        rows = await self._repo.list_active(ContractStatus)
        for row in rows:
            self._remember(ContractStatus.__tablename__, row)
        return rows
