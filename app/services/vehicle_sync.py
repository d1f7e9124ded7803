"""Best-effort vehicle status writes that follow a contract transition.

The contract mutation is the primary write and must never be blocked by the
vehicle bookkeeping. Each vehicle write runs in a SAVEPOINT; on failure only
the savepoint is rolled back, the failure is logged, and a pending
``VehicleStatusSync`` row is recorded so ``retry_pending`` can apply it later.
"""


import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AppException, NotFoundError
from app.domain.enums import SyncState, VehicleStatusName
from app.domain.vehicle_sync import VehicleStatusSync
from app.repositories.vehicle import VehicleRepository
from app.repositories.vehicle_sync import VehicleStatusSyncRepository
from app.services.status_resolver import StatusResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryOutcome:
    applied: int
    pending: int


class VehicleStatusSynchronizer:
    def __init__(self, session: AsyncSession, user_id: str, resolver: StatusResolver):
        self._session = session
        self._user_id = user_id
        self._resolver = resolver
        self._vehicles = VehicleRepository(session, user_id)
        self._syncs = VehicleStatusSyncRepository(session, user_id)

    async def _apply(self, vehicle_id: str, target: VehicleStatusName) -> None:
        async with self._session.begin_nested():
            status_id = await self._resolver.resolve_vehicle_status(target)
            vehicle = await self._vehicles.set_status(vehicle_id, status_id)
            if vehicle is None:
                raise NotFoundError("Vehicle", vehicle_id)

    async def _supersede_pending(self, vehicle_id: str, keep: VehicleStatusSync | None = None) -> None:
        # Last writer wins on a vehicle's status; older intents are obsolete
        for row in await self._syncs.pending_for_vehicle(vehicle_id):
            if row is not keep:
                row.state = SyncState.SUPERSEDED.value

    async def sync(
        self,
        vehicle_id: str,
        target: VehicleStatusName,
        *,
        contract_id: str | None,
        trigger: str,
    ) -> str | None:
        """Move *vehicle_id* to *target*; returns a warning instead of raising."""
        try:
            await self._apply(vehicle_id, target)
        except (AppException, SQLAlchemyError) as exc:
            error = getattr(exc, "message", None) or str(exc)
            logger.warning(
                "Vehicle %s status update to %r after contract %s failed (non-fatal): %s",
                vehicle_id, target.value, trigger, error,
            )
            row = VehicleStatusSync(
                user_id=self._user_id,
                vehicle_id=vehicle_id,
                contract_id=contract_id,
                target_status=target.value,
                trigger=trigger,
                state=SyncState.PENDING.value,
                attempts=1,
                last_error=error,
            )
            self._session.add(row)
            await self._supersede_pending(vehicle_id, keep=row)
            return f"Vehicle status could not be set to '{target.value}': {error}"

        await self._supersede_pending(vehicle_id)
        logger.debug("Vehicle %s status set to %r", vehicle_id, target.value)
        return None

    async def list_pending(self) -> list[VehicleStatusSync]:
        return await self._syncs.list_pending()

    async def retry_pending(self) -> RetryOutcome:
        applied = pending = 0
        for row in await self._syncs.list_pending():
            try:
                await self._apply(row.vehicle_id, VehicleStatusName(row.target_status))
            except (AppException, SQLAlchemyError, ValueError) as exc:
                row.attempts += 1
                row.last_error = getattr(exc, "message", None) or str(exc)
                pending += 1
                logger.warning(
                    "Retry of vehicle %s status %r failed (attempt %d): %s",
                    row.vehicle_id, row.target_status, row.attempts, row.last_error,
                )
                continue
            row.state = SyncState.APPLIED.value
            row.applied_at = datetime.now(timezone.utc)
            applied += 1
        await self._session.flush()
        logger.info("Vehicle status retry: %d applied, %d still pending", applied, pending)
        return RetryOutcome(applied=applied, pending=pending)
