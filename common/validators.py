"""Validation helpers shared by the console and REST surfaces."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

from .exceptions import ValidationError

DATE_FORMAT = "%Y-%m-%d"


def parse_amount(raw: object, field: str = "amount") -> float:
    """Convert raw input to a finite float; sign and magnitude are not checked."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = float(str(raw).strip()) if isinstance(raw, str) else float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc
    if not math.isfinite(amount):
        raise ValidationError(f"{field} must be a finite number")
    return amount


def parse_date(raw: object, field: str = "date") -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ValidationError(f"{field} must be a date or a YYYY-MM-DD string")
    try:
        return datetime.strptime(raw.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationError(f"Invalid {field} '{raw}'. Expected format YYYY-MM-DD.") from exc


def validate_category_name(value: object, field: str = "category") -> str:
    """Return the name unchanged; category matching is exact, so no trimming."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if not value.strip():
        raise ValidationError(f"{field} cannot be empty")
    return value


def optional_category(value: Optional[str]) -> Optional[str]:
    """Map blank filter input to ``None`` (all categories)."""
    if value is None or not value.strip():
        return None
    return value
