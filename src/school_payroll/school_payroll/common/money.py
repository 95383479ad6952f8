from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..core.constants import MONEY_QUANTUM
from ..core.exceptions import ValidationError

ZERO = Decimal("0")


def to_decimal(value: object, *, field_name: str = "value") -> Decimal:
    """Coerce ints, floats, strings and Decimals into Decimal (floats go through str)."""
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return ZERO
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a number: {value!r}") from None


def round_money(value: Decimal) -> Decimal:
    return to_decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
