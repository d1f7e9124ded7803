"""SQLAlchemy ORM models for the contract / vehicle status lookup tables.

Lookup rows are global (shared by every user) and resolved by ``name``.
"""

from __future__ import annotations

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import LookupMixin, TimestampMixin


class ContractStatus(Base, LookupMixin, TimestampMixin):
    __tablename__ = "contract_statuses"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )


class VehicleStatus(Base, LookupMixin, TimestampMixin):
    __tablename__ = "vehicle_statuses"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
