"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  contract.py      — rental contracts (owned by this service)
  vehicle.py       — vehicles, only status_id is written from here
  lookup.py        — ContractStatus / VehicleStatus name-indexed lookups
  vehicle_sync.py  — pending vehicle status writes awaiting retry
  audit.py         — Immutable audit trail (never updated or deleted)
  mixins.py        — Shared TimestampMixin, OwnerMixin, LookupMixin
  enums.py         — Status names referenced from code
"""

from app.domain.audit import AuditTrail
from app.domain.contract import Contract
from app.domain.lookup import ContractStatus, VehicleStatus
from app.domain.vehicle import Vehicle
from app.domain.vehicle_sync import VehicleStatusSync

__all__ = [
    "AuditTrail",
    "Contract",
    "ContractStatus",
    "Vehicle",
    "VehicleStatus",
    "VehicleStatusSync",
]
