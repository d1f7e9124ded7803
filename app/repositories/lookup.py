"""Read-only access to the global status lookup tables.

Lookups are shared by every user, so this repository is not owner-scoped.
"""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.lookup import ContractStatus, VehicleStatus

LookupT = TypeVar("LookupT", ContractStatus, VehicleStatus)


class LookupRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_name(
        self, model: type[LookupT], name: str, *, active_only: bool = True
    ) -> LookupT | None:
        q = select(model).where(model.name == name)
        if active_only:
            q = q.where(model.is_active.is_(True))
        result = await self._session.execute(q.limit(1))
        return result.scalars().first()

    async def first_by_code(
        self, model: type[LookupT], *, active_only: bool = True
    ) -> LookupT | None:
        q = select(model)
        if active_only:
            q = q.where(model.is_active.is_(True))
        q = q.order_by(model.code.asc().nulls_last(), model.name.asc()).limit(1)
        result = await self._session.execute(q)
        return result.scalars().first()

    async def get_by_id(self, model: type[LookupT], status_id: str) -> LookupT | None:
        return await self._session.get(model, status_id)

    async def list_active(self, model: type[LookupT]) -> list[LookupT]:
        result = await self._session.execute(
            select(model)
            .where(model.is_active.is_(True))
            .order_by(model.code.asc().nulls_last(), model.name.asc())
        )
        return list(result.scalars().all())
