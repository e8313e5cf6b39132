from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int_range(value: object, field_name: str, lo: int, hi: int) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None
    if number < lo or number > hi:
        raise ValidationError(f"{field_name} must be between {lo} and {hi}")
    return number


def normalize_optional(value: object) -> Optional[str]:
    text = str(value if value is not None else "").strip()
    return text or None
