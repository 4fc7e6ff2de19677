"""Tests for booking policy: overlap, business hours, visibility, cancellation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from app.booking.policy import (
    BusinessHours,
    business_hours_message,
    can_cancel,
    can_modify_booking,
    can_view_booking,
    intervals_overlap,
    is_on_the_hour,
    is_within_business_hours,
)
from app.models.user import UserRole
from tests.factories import at

DAY = date(2024, 1, 10)
UTC_HOURS = BusinessHours(open_hour=9, last_start_hour=20, timezone="UTC")


class TestIntervalsOverlap:
    """Half-open interval semantics."""

    def test_back_to_back_intervals_do_not_overlap(self) -> None:
        assert intervals_overlap(at(DAY, 14), at(DAY, 15), at(DAY, 13), at(DAY, 14)) is False
        assert intervals_overlap(at(DAY, 14), at(DAY, 15), at(DAY, 15), at(DAY, 16)) is False

    def test_same_start_overlaps(self) -> None:
        assert intervals_overlap(at(DAY, 14), at(DAY, 15), at(DAY, 14), at(DAY, 16)) is True

    def test_contained_interval_overlaps(self) -> None:
        assert intervals_overlap(at(DAY, 13), at(DAY, 17), at(DAY, 14), at(DAY, 15)) is True

    def test_partial_overlap_is_symmetric(self) -> None:
        a = (at(DAY, 14), at(DAY, 16))
        b = (at(DAY, 15), at(DAY, 17))
        assert intervals_overlap(*a, *b) is True
        assert intervals_overlap(*b, *a) is True

    def test_disjoint_intervals(self) -> None:
        assert intervals_overlap(at(DAY, 9), at(DAY, 10), at(DAY, 18), at(DAY, 19)) is False


class TestBusinessHours:
    """Slot boundary and business window checks."""

    def test_on_the_hour(self) -> None:
        assert is_on_the_hour(at(DAY, 14), UTC_HOURS) is True

    def test_off_the_hour(self) -> None:
        assert is_on_the_hour(at(DAY, 14, 30), UTC_HOURS) is False

    def test_seconds_past_the_hour_rejected(self) -> None:
        assert is_on_the_hour(at(DAY, 14) + timedelta(seconds=5), UTC_HOURS) is False

    @pytest.mark.parametrize("hour", [9, 12, 20])
    def test_inside_window(self, hour: int) -> None:
        assert is_within_business_hours(at(DAY, hour), UTC_HOURS) is True

    @pytest.mark.parametrize("hour", [0, 8, 21, 23])
    def test_outside_window(self, hour: int) -> None:
        assert is_within_business_hours(at(DAY, hour), UTC_HOURS) is False

    def test_window_uses_business_timezone(self) -> None:
        """08:00 UTC is 09:00 in Berlin in winter."""
        berlin = BusinessHours(open_hour=9, last_start_hour=20, timezone="Europe/Berlin")

        assert is_within_business_hours(at(DAY, 8), berlin) is True
        assert is_within_business_hours(at(DAY, 20), berlin) is False

    def test_message_names_the_window(self) -> None:
        assert business_hours_message(UTC_HOURS) == "Bookings must start between 09:00 and 20:00"


class TestVisibility:
    """Who may see and change a booking."""

    def test_owner_can_view(self) -> None:
        assert can_view_booking("u1", UserRole.CUSTOMER, "u1", "s1") is True

    def test_booked_specialist_can_view(self) -> None:
        assert can_view_booking("s1", UserRole.SPECIALIST, "u1", "s1") is True

    def test_other_customer_cannot_view(self) -> None:
        assert can_view_booking("u2", UserRole.CUSTOMER, "u1", "s1") is False

    def test_other_specialist_cannot_view(self) -> None:
        assert can_view_booking("s2", UserRole.SPECIALIST, "u1", "s1") is False

    def test_admin_can_view(self) -> None:
        assert can_view_booking("a1", UserRole.ADMIN, "u1", "s1") is True

    def test_only_owner_or_admin_modify(self) -> None:
        assert can_modify_booking("u1", "customer", "u1") is True
        assert can_modify_booking("a1", "admin", "u1") is True
        assert can_modify_booking("s1", "specialist", "u1") is False
        assert can_modify_booking("u2", "customer", "u1") is False


class TestCancellationWindow:
    """Non-admins must cancel more than an hour ahead."""

    NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)

    def test_two_hours_ahead_allowed(self) -> None:
        allowed, _ = can_cancel(UserRole.CUSTOMER, self.NOW + timedelta(hours=2), self.NOW, 60)
        assert allowed is True

    def test_exactly_one_hour_ahead_rejected(self) -> None:
        allowed, message = can_cancel(UserRole.CUSTOMER, self.NOW + timedelta(hours=1), self.NOW, 60)
        assert allowed is False
        assert "60 minutes" in message

    def test_thirty_minutes_ahead_rejected(self) -> None:
        allowed, _ = can_cancel(UserRole.CUSTOMER, self.NOW + timedelta(minutes=30), self.NOW, 60)
        assert allowed is False

    def test_admin_bypasses_cutoff(self) -> None:
        allowed, _ = can_cancel(UserRole.ADMIN, self.NOW + timedelta(minutes=30), self.NOW, 60)
        assert allowed is True

    def test_naive_start_treated_as_utc(self) -> None:
        naive_start = (self.NOW + timedelta(minutes=30)).replace(tzinfo=None)
        allowed, _ = can_cancel("customer", naive_start, self.NOW, 60)
        assert allowed is False
