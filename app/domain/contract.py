"""SQLAlchemy ORM model for rental Contracts."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import OwnerMixin, TimestampMixin

_MONEY = Numeric(12, 2, asdecimal=False)


class Contract(Base, OwnerMixin, TimestampMixin):
    __tablename__ = "contracts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # Not unique at the DB level; uniqueness is checked when generating
    contract_number: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    tajeer_number: Mapped[Optional[str]] = mapped_column(String(50), index=True, nullable=True)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Customers and branches live in other modules; stored as plain references
    selected_customer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    selected_vehicle_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    branch_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    status_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("contract_statuses.id"), nullable=False, index=True
    )

    # Pricing & terms
    daily_rental_rate: Mapped[float] = mapped_column(_MONEY, nullable=False)
    hourly_delay_rate: Mapped[float] = mapped_column(_MONEY, nullable=False)
    current_km: Mapped[int] = mapped_column(Integer, nullable=False)
    rental_days: Mapped[int] = mapped_column(Integer, nullable=False)
    permitted_daily_km: Mapped[int] = mapped_column(Integer, nullable=False)
    excess_km_rate: Mapped[float] = mapped_column(_MONEY, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    total_amount: Mapped[float] = mapped_column(_MONEY, nullable=False)
    deposit: Mapped[Optional[float]] = mapped_column(_MONEY, nullable=True)

    # Lifecycle metadata, set only by the matching transition
    cancel_reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    cancel_comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cancel_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    close_reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    close_comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    close_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    hold_reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    hold_comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    hold_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # "duration" | "fees"
    extension_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    extension_fee_amount: Mapped[Optional[float]] = mapped_column(_MONEY, nullable=True)
    extension_duration_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    extension_payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    extension_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
