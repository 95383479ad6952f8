from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..core.exceptions import ValidationError
from .money import to_decimal


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive(value: object, field_name: str) -> Decimal:
    number = to_decimal(value, field_name=field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number


def require_non_negative(value: object, field_name: str) -> Decimal:
    number = to_decimal(value, field_name=field_name)
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number
