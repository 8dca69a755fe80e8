# core/utils.py

from typing import Any


def _clean(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return value.strip() or None


def sanitize(data: dict) -> dict:
    """
    Prepare a row for Supabase:
    - strip string whitespace
    - blank strings become None (optional columns are absent, never "")
    Numbers, booleans, dates (already JSON strings) pass through.
    """
    return {k: _clean(v) for k, v in data.items()}


def drop_none(data: dict) -> dict:
    """Remove keys whose value is None (lets column defaults apply)."""
    return {k: v for k, v in data.items() if v is not None}
