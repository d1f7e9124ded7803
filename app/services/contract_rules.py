"""Pure contract rules: number generation, required fields, extension arithmetic.

Nothing here touches the database, so the rules can be unit-tested directly
and run before any store access.
"""


import math
import secrets
import string
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from app.core.exceptions import ValidationError
from app.domain.enums import ExtensionType

CONTRACT_NUMBER_LENGTH: int = 8
CONTRACT_NUMBER_ALPHABET: str = string.ascii_uppercase + string.digits

REQUIRED_CONTRACT_FIELDS: tuple[str, ...] = (
    "start_date",
    "end_date",
    "selected_vehicle_id",
    "selected_customer_id",
    "daily_rental_rate",
    "hourly_delay_rate",
    "current_km",
    "rental_days",
    "permitted_daily_km",
    "excess_km_rate",
    "payment_method",
    "total_amount",
    "branch_id",
)


def generate_contract_number() -> str:
    """8 symbols drawn uniformly from ``[A-Z0-9]``."""
    return "".join(
        secrets.choice(CONTRACT_NUMBER_ALPHABET) for _ in range(CONTRACT_NUMBER_LENGTH)
    )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def first_missing_field(payload: Mapping[str, Any], fields: Iterable[str]) -> str | None:
    """Name of the first field that is absent, ``None`` or an empty string."""
    for field in fields:
        if _is_blank(payload.get(field)):
            return field
    return None


def require_fields(payload: Mapping[str, Any], fields: Iterable[str] = REQUIRED_CONTRACT_FIELDS) -> None:
    missing = first_missing_field(payload, fields)
    if missing:
        raise ValidationError(f"Missing required field: {missing}")


def require_reason(reason: str | None, label: str) -> str:
    if _is_blank(reason):
        raise ValidationError(f"{label} reason is required")
    return reason.strip()


# ---------------------------------------------------------------------------
# Extension
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ExtensionResult:
    new_end_date: date
    days_added: int


def validate_extension_request(
    extension_type: str | None,
    fee_amount: Any = None,
    duration_days: Any = None,
) -> ExtensionType:
    """Reject incomplete extension requests before any store access."""
    if _is_blank(extension_type):
        raise ValidationError("Missing required fields for contract extension: extensionType")
    try:
        kind = ExtensionType(str(extension_type).strip().lower())
    except ValueError as exc:
        raise ValidationError(
            f"Invalid extensionType '{extension_type}': expected 'duration' or 'fees'"
        ) from exc

    if kind is ExtensionType.FEES and _is_blank(fee_amount):
        raise ValidationError("Missing required fields for contract extension: feeAmount")
    if kind is ExtensionType.DURATION and _is_blank(duration_days):
        raise ValidationError("Missing required fields for contract extension: durationDays")
    return kind


def parse_duration_days(value: Any) -> int:
    """Whole days from *value*; anything unparsable counts as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        pass
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        return 0
    return int(parsed) if parsed.is_finite() else 0


def parse_amount(value: Any, field: str) -> Decimal:
    """Finite decimal from *value* or a ValidationError naming *field*."""
    if _is_blank(value) or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if not parsed.is_finite():
        raise ValidationError(f"{field} must be a number")
    return parsed


def days_for_fee(fee_amount: Any, daily_rate: Any) -> int:
    """``ceil(fee / rate)``; a zero or unset rate is rejected, never divided by."""
    fee = parse_amount(fee_amount, "feeAmount")
    if fee <= 0:
        raise ValidationError("feeAmount must be greater than zero")
    if daily_rate is None:
        raise ValidationError("Contract has no daily rental rate; cannot extend by fees")
    rate = parse_amount(daily_rate, "daily_rental_rate")
    if rate <= 0:
        raise ValidationError("Contract daily rental rate must be greater than zero to extend by fees")
    return math.ceil(fee / rate)


def compute_extended_end_date(
    current_end_date: date,
    extension_type: str,
    duration_days: Any = None,
    fee_amount: Any = None,
    daily_rate: Any = None,
) -> ExtensionResult:
    kind = ExtensionType(extension_type)
    if kind is ExtensionType.DURATION:
        days = parse_duration_days(duration_days)
        if days < 0:
            raise ValidationError("durationDays must not be negative")
    else:
        days = days_for_fee(fee_amount, daily_rate)

    try:
        new_end_date = current_end_date + timedelta(days=days)
    except (OverflowError, ValueError) as exc:
        raise ValidationError("Extension moves end_date out of range") from exc
    return ExtensionResult(new_end_date=new_end_date, days_added=days)
