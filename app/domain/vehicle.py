"""SQLAlchemy ORM model for Vehicles.

Vehicle CRUD belongs to the fleet module; contracts only move ``status_id``
between "Available" and "In Contract".
"""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import OwnerMixin, TimestampMixin


class Vehicle(Base, OwnerMixin, TimestampMixin):
    __tablename__ = "vehicles"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    plate_number: Mapped[Optional[str]] = mapped_column(String(50), index=True, nullable=True)
    serial_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    make: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    status_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("vehicle_statuses.id"), nullable=True, index=True
    )
