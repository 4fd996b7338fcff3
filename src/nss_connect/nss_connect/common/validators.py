from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from ..core.constants import HOURS_QUANTUM, MAX_HOURS_PER_EVENT
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a positive integer")
    try:
        number = int(value)
        # int() truncates 1.7 to 1
        if isinstance(value, (float, Decimal)) and number != value:
            raise ValueError(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a positive integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number


def require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value


def parse_hours(value: Any, field_name: str = "Hours") -> Decimal:
    """Parse a non-negative hour amount rounded to two decimals."""

    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        hours = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not hours.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if hours < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if hours > MAX_HOURS_PER_EVENT:
        raise ValidationError(f"{field_name} cannot exceed {MAX_HOURS_PER_EVENT}")
    return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def require_distinct(values: Iterable[int], field_name: str) -> None:
    seen: set[int] = set()
    for v in values:
        if v in seen:
            raise ValidationError(f"Duplicate {field_name}: {v}")
        seen.add(v)
