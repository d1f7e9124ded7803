"""Contract repository: owner-scoped CRUD plus listing search."""


from sqlalchemy import exists, or_, select

from app.domain.contract import Contract
from app.repositories.base import BaseRepository


class ContractRepository(BaseRepository[Contract]):
    model = Contract

    async def search(
        self,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
        status_id: str | None = None,
        vehicle_id: str | None = None,
        customer_id: str | None = None,
    ) -> tuple[list[Contract], int]:
        """Newest first, optionally matching contract / tajeer number."""
        q = self._base_query()
        if search:
            pattern = f"%{search}%"
            q = q.where(
                or_(
                    Contract.contract_number.ilike(pattern),
                    Contract.tajeer_number.ilike(pattern),
                )
            )
        return await self.list(
            offset=offset,
            limit=limit,
            order_by="created_at",
            order="desc",
            filters={
                "status_id": status_id,
                "selected_vehicle_id": vehicle_id,
                "selected_customer_id": customer_id,
            },
            query=q,
        )

    async def contract_number_exists(self, contract_number: str) -> bool:
        # Checked across all owners: numbers are printed on paperwork
        result = await self._session.execute(
            select(exists().where(Contract.contract_number == contract_number))
        )
        return bool(result.scalar())
