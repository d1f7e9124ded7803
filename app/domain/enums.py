"""Status names the code relies on.

Lookup identifiers are assigned by the store and differ between
environments, so only the display names are authoritative here.
"""

from enum import Enum


class ContractStatusName(str, Enum):
    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"
    CLOSED = "Closed"


TERMINAL_CONTRACT_STATUSES = frozenset(
    {ContractStatusName.CANCELLED.value, ContractStatusName.CLOSED.value}
)


class VehicleStatusName(str, Enum):
    AVAILABLE = "Available"
    IN_CONTRACT = "In Contract"


class ExtensionType(str, Enum):
    DURATION = "duration"
    FEES = "fees"


class SyncState(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    SUPERSEDED = "superseded"
