from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_positive_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; "true" is not an id.
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a positive integer")
    # int() would truncate 1.9 to 1.
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number


def optional_positive_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_positive_int(value, field_name)
