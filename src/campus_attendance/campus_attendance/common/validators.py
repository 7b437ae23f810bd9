from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def normalize_token(value: Optional[str]) -> str:
    """Case- and whitespace-insensitive form used for org name/id matching."""
    if not value:
        return ""
    return " ".join(str(value).split()).casefold()


def same_token(left: Optional[str], right: Optional[str]) -> bool:
    a = normalize_token(left)
    return bool(a) and a == normalize_token(right)
