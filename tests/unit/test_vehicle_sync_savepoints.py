from __future__ import annotations

import asyncio

from app.domain import VehicleStatusSync
from app.domain.enums import SyncState
from app.services.status_resolver import StatusResolver
from app.services.vehicle_sync import VehicleStatusSynchronizer


def _add_pending_sync(session_factory, vehicle_id: str) -> None:
    async def _add():
        async with session_factory() as session:
            session.add(
                VehicleStatusSync(
                    user_id="user-a",
                    vehicle_id=vehicle_id,
                    target_status="Available",
                    trigger="cancel",
                    state=SyncState.PENDING.value,
                )
            )
            await session.commit()

    asyncio.run(_add())


def _retry(session_factory, *, commit: bool):
    async def _run():
        async with session_factory() as session:
            synchronizer = VehicleStatusSynchronizer(session, "user-a", StatusResolver(session))
            outcome = await synchronizer.retry_pending()
            if commit:
                await session.commit()
            else:
                await session.rollback()
            return outcome

    return asyncio.run(_run())


def test_rolled_back_retry_leaves_vehicle_untouched(session_factory, db):
    vehicle_id = db.add_vehicle("user-a", status="In Contract")
    _add_pending_sync(session_factory, vehicle_id)

    outcome = _retry(session_factory, commit=False)

    assert outcome.applied == 1
    assert db.vehicle_status(vehicle_id) == "In Contract"


def test_committed_retry_applies_vehicle_status(session_factory, db):
    vehicle_id = db.add_vehicle("user-a", status="In Contract")
    _add_pending_sync(session_factory, vehicle_id)

    outcome = _retry(session_factory, commit=True)

    assert outcome.applied == 1
    assert outcome.pending == 0
    assert db.vehicle_status(vehicle_id) == "Available"
    assert _retry(session_factory, commit=True).applied == 0
