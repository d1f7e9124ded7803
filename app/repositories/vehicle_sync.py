from sqlalchemy import select

from app.domain.enums import SyncState
from app.domain.vehicle_sync import VehicleStatusSync
from app.repositories.base import BaseRepository


class VehicleStatusSyncRepository(BaseRepository[VehicleStatusSync]):
    model = VehicleStatusSync

    async def list_pending(self) -> list[VehicleStatusSync]:
        result = await self._session.execute(
            self._base_query()
            .where(VehicleStatusSync.state == SyncState.PENDING.value)
            .order_by(VehicleStatusSync.created_at.asc())
        )
        return list(result.scalars().all())

    async def pending_for_vehicle(self, vehicle_id: str) -> list[VehicleStatusSync]:
        result = await self._session.execute(
            select(VehicleStatusSync)
            .where(VehicleStatusSync.user_id == self._user_id)
            .where(VehicleStatusSync.vehicle_id == vehicle_id)
            .where(VehicleStatusSync.state == SyncState.PENDING.value)
        )
        return list(result.scalars().all())
