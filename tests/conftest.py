from __future__ import annotations

import asyncio
import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-for-the-contract-lifecycle-suite")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import app.db.base as db_base
from app.core.security import create_access_token
from app.db.base import Base, enable_sqlite_savepoints
from app.db.seed import seed_lookup_statuses
from app.domain import AuditTrail, Contract, Vehicle, VehicleStatus
from app.main import create_app


class DbHelper:
    """Synchronous helpers for arranging and inspecting the test database."""

    def __init__(self, factory: async_sessionmaker):
        self.factory = factory

    def _run(self, fn):
        async def _inner():
            async with self.factory() as session:
                result = await fn(session)
                await session.commit()
                return result

        return asyncio.run(_inner())

    def add_vehicle(self, user_id: str, status: str | None = "Available") -> str:
        async def _add(session):
            status_id = None
            if status:
                status_id = (
                    await session.execute(select(VehicleStatus.id).where(VehicleStatus.name == status))
                ).scalar_one()
            vehicle = Vehicle(user_id=user_id, plate_number="ABC 1234", status_id=status_id)
            session.add(vehicle)
            await session.flush()
            return vehicle.id

        return self._run(_add)

    def vehicle_status(self, vehicle_id: str) -> str | None:
        async def _get(session):
            return (
                await session.execute(
                    select(VehicleStatus.name)
                    .join(Vehicle, Vehicle.status_id == VehicleStatus.id)
                    .where(Vehicle.id == vehicle_id)
                )
            ).scalar_one_or_none()

        return self._run(_get)

    def contract(self, contract_id: str) -> Contract | None:
        async def _get(session):
            return await session.get(Contract, contract_id)

        return self._run(_get)

    def count_contracts(self) -> int:
        async def _count(session):
            return (await session.execute(select(func.count()).select_from(Contract))).scalar_one()

        return self._run(_count)

    def set_status_active(self, model, name: str, active: bool) -> None:
        async def _set(session):
            await session.execute(update(model).where(model.name == name).values(is_active=active))

        self._run(_set)

    def remove_status(self, model, name: str) -> None:
        async def _remove(session):
            await session.execute(delete(model).where(model.name == name))

        self._run(_remove)

    def audit_actions(self, entity_id: str) -> list[str]:
        async def _get(session):
            rows = await session.execute(
                select(AuditTrail.action)
                .where(AuditTrail.entity_id == entity_id)
                .order_by(AuditTrail.created_at)
            )
            return list(rows.scalars().all())

        return self._run(_get)


@pytest.fixture
def session_factory(tmp_path, monkeypatch):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'rental_test.db'}", poolclass=NullPool
    )
    enable_sqlite_savepoints(engine)
    factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    async def _setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with factory() as session:
            await seed_lookup_statuses(session)
            await session.commit()

    asyncio.run(_setup())
    monkeypatch.setattr(db_base, "async_session_factory", factory)
    yield factory
    asyncio.run(engine.dispose())


@pytest.fixture
def db(session_factory) -> DbHelper:
    return DbHelper(session_factory)


@pytest.fixture
def client(session_factory):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def auth():
    def _headers(user_id: str = "user-a") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers


@pytest.fixture
def contract_payload():
    def _payload(vehicle_id: str, **overrides) -> dict:
        payload = {
            "start_date": "2024-03-01",
            "end_date": "2024-03-10",
            "selected_vehicle_id": vehicle_id,
            "selected_customer_id": "customer-1",
            "branch_id": "branch-1",
            "daily_rental_rate": 100,
            "hourly_delay_rate": 15,
            "current_km": 12000,
            "rental_days": 9,
            "permitted_daily_km": 250,
            "excess_km_rate": 0.5,
            "payment_method": "cash",
            "total_amount": 900,
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def create_contract(client, db, auth, contract_payload):
    """Create a contract for *user_id* on a fresh vehicle; returns (contract, vehicle_id)."""

    def _create(user_id: str = "user-a", **overrides) -> tuple[dict, str]:
        vehicle_id = db.add_vehicle(user_id)
        response = client.post(
            "/api/v1/contracts",
            json=contract_payload(vehicle_id, **overrides),
            headers=auth(user_id),
        )
        assert response.status_code == 201, response.text
        return response.json()["contract"], vehicle_id

    return _create
