"""Booking rules: policy checks, the validation pipeline and the sweeper."""

from app.booking.policy import (
    BusinessHours,
    can_cancel,
    can_modify_booking,
    can_view_booking,
    intervals_overlap,
)
from app.booking.sweeper import complete_elapsed_bookings
from app.booking.validation import FIELD_RULES, BookingDraft, Rule, run_rules

__all__ = [
    "BusinessHours",
    "can_cancel",
    "can_modify_booking",
    "can_view_booking",
    "intervals_overlap",
    "complete_elapsed_bookings",
    "FIELD_RULES",
    "BookingDraft",
    "Rule",
    "run_rules",
]
