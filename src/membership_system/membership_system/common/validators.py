from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_month_index(value: Any, field_name: str = "Month") -> int:
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
    if month < 0 or month > 11:
        raise ValidationError(f"{field_name} must be between 0 and 11")
    return month


def require_year(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("Year is invalid")


def parse_amount(value: Any, field_name: str = "Amount") -> Decimal:
    """Parse a monetary value, rejecting blanks and non-numbers."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} is invalid")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} is invalid")
    return amount


def require_positive_amount(value: Any, field_name: str = "Amount") -> Decimal:
    amount = parse_amount(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return amount
