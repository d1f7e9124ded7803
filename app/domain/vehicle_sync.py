"""SQLAlchemy ORM model for pending vehicle status writes.

A row is recorded whenever the compensating vehicle update that follows a
contract transition fails, so it can be retried instead of being lost.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.enums import SyncState
from app.domain.mixins import OwnerMixin, TimestampMixin


class VehicleStatusSync(Base, OwnerMixin, TimestampMixin):
    __tablename__ = "vehicle_status_syncs"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    vehicle_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # Plain reference: the contract may since have been deleted
    contract_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    target_status: Mapped[str] = mapped_column(String(100), nullable=False)
    # "create" | "cancel" | "close" | "delete"
    trigger: Mapped[str] = mapped_column(String(20), nullable=False)

    state: Mapped[str] = mapped_column(
        String(20), default=SyncState.PENDING.value, nullable=False, index=True
    )
    attempts: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    last_error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    applied_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
