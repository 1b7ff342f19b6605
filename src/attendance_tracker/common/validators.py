from __future__ import annotations

from ..core.exceptions import ValidationError
from .datetime_utils import time_string_to_minutes


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_time_string(value: str, field_name: str) -> str:
    """Validate an HH:mm value and return it trimmed to HH:mm."""
    minutes = time_string_to_minutes(require_non_empty(value, field_name))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def require_non_negative(value: int | None, field_name: str) -> int:
    value = int(value or 0)
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return value
