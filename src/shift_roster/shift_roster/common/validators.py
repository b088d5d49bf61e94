from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_positive_id(value, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
    if ident <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return ident


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None
