from __future__ import annotations

from typing import Any, Mapping

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing {field_name}")
    return value.strip()


def require_mapping(value: Any) -> dict:
    if not isinstance(value, Mapping):
        raise ValidationError("Record must be a JSON object")
    return dict(value)


def require_one_of(value: Any, field_name: str, allowed) -> str:
    allowed_values = {getattr(a, "value", a) for a in allowed}
    if value not in allowed_values:
        raise ValidationError(f"Invalid {field_name}")
    return value
