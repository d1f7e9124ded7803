"""Default lookup rows for contract and vehicle statuses.

Inserts only the names that are missing, so it is safe to run on every start.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.lookup import ContractStatus, VehicleStatus

logger = logging.getLogger(__name__)

# (name, code, color)
DEFAULT_CONTRACT_STATUSES: list[tuple[str, str, str]] = [
    ("Active", "ACTIVE", "#16a34a"),
    ("On Hold", "ON_HOLD", "#f59e0b"),
    ("Cancelled", "CANCELLED", "#dc2626"),
    ("Closed", "CLOSED", "#6b7280"),
]

DEFAULT_VEHICLE_STATUSES: list[tuple[str, str, str]] = [
    ("Available", "AVAILABLE", "#16a34a"),
    ("In Contract", "IN_CONTRACT", "#2563eb"),
    ("Maintenance", "MAINTENANCE", "#f59e0b"),
]


async def _seed(session: AsyncSession, model, rows: list[tuple[str, str, str]]) -> int:
    existing = set((await session.execute(select(model.name))).scalars().all())
    added = 0
    for name, code, color in rows:
        if name in existing:
            continue
        session.add(model(name=name, code=code, color=color, is_active=True))
        added += 1
    return added


async def seed_lookup_statuses(session: AsyncSession) -> int:
    """Insert missing default statuses; returns how many rows were added."""
    added = await _seed(session, ContractStatus, DEFAULT_CONTRACT_STATUSES)
    added += await _seed(session, VehicleStatus, DEFAULT_VEHICLE_STATUSES)
    await session.flush()
    if added:
        logger.info("Seeded %d lookup status row(s)", added)
    return added
