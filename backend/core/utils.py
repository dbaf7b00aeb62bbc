"""
Utility functions for the workflow orchestrator.

Includes:
- UTC datetime helpers
- Type-sensitive value comparison used by filters and conditions
"""

from datetime import datetime, timezone
from typing import Any, Optional


class _Missing:
    """Marker for a field absent from a record."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


def utc_now() -> datetime:
    """
    Get the current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: Any, right: Any) -> bool:
    """
    Equality without type coercion.

    ``1 == 1.0`` holds, but ``1`` never equals ``True`` or ``"1"``, and a
    missing field equals nothing.

    Args:
        left: Value read from the record (may be MISSING)
        right: Value from the step config

    Returns:
        True if both values have compatible types and are equal
    """
    if left is MISSING or right is MISSING:
        return False
    if _is_number(left) and _is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return left == right


def _as_number(value: Any) -> Optional[float]:
    if _is_number(value):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def compare(left: Any, right: Any) -> Optional[int]:
    """
    Order two values: numerically when both are numbers (or one is a numeric
    string), lexicographically when both are strings.

    Returns:
        -1, 0 or 1, or None when the values cannot be ordered
    """
    if left is MISSING or right is MISSING or left is None or right is None:
        return None
    if isinstance(left, str) and isinstance(right, str):
        return (left > right) - (left < right)
    if _is_number(left) or _is_number(right):
        lnum, rnum = _as_number(left), _as_number(right)
        if lnum is None or rnum is None:
            return None
        return (lnum > rnum) - (lnum < rnum)
    return None
