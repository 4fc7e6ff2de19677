"""Identifier helpers."""

from typing import Any
from uuid import UUID


def is_valid_id(value: Any) -> bool:
    """Check whether ``value`` is a well-formed UUID string.

    Primary keys are UUIDs; malformed ids must be treated as "not found"
    before they reach the database driver.
    """
    if not isinstance(value, str):
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True
