from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import delete

from app.core.exceptions import ConfigurationError
from app.domain import ContractStatus
from app.domain.enums import ContractStatusName, VehicleStatusName
from app.services.status_resolver import StatusResolver


def _with_session(session_factory, fn):
    async def _inner():
        async with session_factory() as session:
            result = await fn(session)
            await session.commit()
            return result

    return asyncio.run(_inner())


def _replace_contract_statuses(session_factory, rows):
    async def _replace(session):
        await session.execute(delete(ContractStatus))
        for name, code, active in rows:
            session.add(ContractStatus(name=name, code=code, is_active=active))

    _with_session(session_factory, _replace)


def _default_status_name(session_factory):
    async def _resolve(session):
        resolver = StatusResolver(session)
        status_id = await resolver.resolve_default_contract_status()
        return await resolver.contract_status_name(status_id)

    return _with_session(session_factory, _resolve)


def test_default_status_prefers_active_named_active(session_factory):
    assert _default_status_name(session_factory) == "Active"


def test_default_status_falls_back_to_first_active_by_code(session_factory):
    _replace_contract_statuses(
        session_factory,
        [("Active", "A00", False), ("Running", "B10", True), ("Draft", "B05", True)],
    )
    assert _default_status_name(session_factory) == "Draft"


def test_default_status_falls_back_to_any_status_by_code(session_factory):
    _replace_contract_statuses(
        session_factory,
        [("Legacy", "Z1", False), ("Archived", "M1", False)],
    )
    assert _default_status_name(session_factory) == "Archived"


def test_default_status_requires_a_configured_status(session_factory):
    _replace_contract_statuses(session_factory, [])
    with pytest.raises(ConfigurationError):
        _default_status_name(session_factory)


def test_named_lookup_has_no_fallback(session_factory):
    _replace_contract_statuses(session_factory, [("Cancelled", "C", False)])

    async def _resolve(session):
        return await StatusResolver(session).resolve_contract_status(ContractStatusName.CANCELLED)

    with pytest.raises(ConfigurationError) as exc:
        _with_session(session_factory, _resolve)
    assert exc.value.message == "Cancelled status not found"


def test_vehicle_status_resolution_is_cached_per_resolver(session_factory):
    async def _resolve(session):
        resolver = StatusResolver(session)
        first = await resolver.resolve_vehicle_status(VehicleStatusName.IN_CONTRACT)
        second = await resolver.resolve_vehicle_status(VehicleStatusName.IN_CONTRACT)
        return first, second

    first, second = _with_session(session_factory, _resolve)
    assert first == second
