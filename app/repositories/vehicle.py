from datetime import datetime, timezone

from app.domain.vehicle import Vehicle
from app.repositories.base import BaseRepository


class VehicleRepository(BaseRepository[Vehicle]):
    model = Vehicle

    async def set_status(self, vehicle_id: str, status_id: str) -> Vehicle | None:
        return await self.update(
            vehicle_id, status_id=status_id, updated_at=datetime.now(timezone.utc)
        )
