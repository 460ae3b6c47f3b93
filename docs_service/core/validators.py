"""Shape checks shared by the lifecycle services.

Each helper answers one question about a raw payload value so the services can
reject bad input before touching the store.
"""

from typing import Any


def id_invalid(value: Any) -> bool:
    """True unless *value* is a positive integer id."""
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        return True
    return value <= 0


def is_unsigned_integer(value: Any) -> bool:
    """True for zero or a positive integer (``parent_id`` accepts 0 for roots)."""
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        return False
    return value >= 0


def is_blank(value: Any) -> bool:
    """True for None, the empty string, or whitespace only."""
    return value is None or not str(value).strip()
