"""Utility functions."""

from app.utils.ids import is_valid_id
from app.utils.time import (
    ensure_utc,
    format_hour_slot,
    parse_date,
    parse_datetime,
    to_zone,
    utc_now,
)

__all__ = [
    "utc_now",
    "ensure_utc",
    "to_zone",
    "parse_datetime",
    "parse_date",
    "format_hour_slot",
    "is_valid_id",
]
