"""Validation helpers shared across expense tracker services."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .exceptions import ValidationError
from .models import quantize_amount


def parse_amount(raw: object, field: str, *, allow_zero: bool = False) -> Decimal:
    """Convert raw input to a Decimal with exactly two fraction digits.

    New expenses must be strictly positive; updates only reject negatives.
    """
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw))
    except (InvalidOperation, TypeError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if allow_zero and amount < 0:
        raise ValidationError(f"{field} must not be negative")
    try:
        rounded = quantize_amount(amount)
    except InvalidOperation as exc:
        raise ValidationError(f"{field} is out of range") from exc

    # Positivity is checked on the rounded value that gets stored.
    if not allow_zero and rounded <= 0:
        raise ValidationError(f"{field} must be greater than zero")

    return rounded


def validate_required_str(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    return trimmed


def validate_optional_str(value: object, field: str) -> str:
    """Return a trimmed string, mapping ``None`` to the empty string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip()


def validate_id(value: object, field: str = "id") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    if value == 0:
        raise ValidationError(f"{field} must be provided")
    return value


def validate_month(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("month must be an integer")
    if not 1 <= value <= 12:
        raise ValidationError("month must be between 1 and 12")
    return value
