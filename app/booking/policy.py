"""Booking policy enforcement.

Pure rules over already-loaded values: slot alignment, business hours,
interval overlap, the cancellation cutoff and who may touch a booking.
Nothing here talks to the database.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from app.core.config import settings
from app.models.user import UserRole
from app.services.rbac import Permission, RBACService
from app.utils.time import ensure_utc, to_zone

@dataclass(frozen=True)
class BusinessHours:
    """Window of allowed start hours, both bounds inclusive.

    Attributes:
        open_hour: Earliest hour a booking may start at
        last_start_hour: Latest hour a booking may start at
        timezone: IANA zone the hours are expressed in
    """

    open_hour: int
    last_start_hour: int
    timezone: str

    @classmethod
    def from_settings(cls) -> "BusinessHours":
        return cls(
            open_hour=settings.booking_open_hour,
            last_start_hour=settings.booking_last_start_hour,
            timezone=settings.business_timezone,
        )


def intervals_overlap(
    start_a: datetime,
    end_a: datetime,
    start_b: datetime,
    end_b: datetime,
) -> bool:
    """Half-open interval overlap test.

    ``[start_a, end_a)`` and ``[start_b, end_b)`` overlap iff
    ``start_a < end_b`` and ``start_b < end_a``. Back-to-back intervals
    (one ends exactly when the other starts) do not overlap.

    Examples:
        >>> from datetime import datetime
        >>> t = lambda h: datetime(2024, 1, 10, h)
        >>> intervals_overlap(t(14), t(15), t(13), t(14))
        False
        >>> intervals_overlap(t(14), t(15), t(14), t(16))
        True
    """
    return start_a < end_b and start_b < end_a


def is_on_the_hour(start: datetime, hours: BusinessHours | None = None) -> bool:
    """Check the start instant sits on a slot boundary (minute, second zero)."""
    hours = hours or BusinessHours.from_settings()
    local = to_zone(start, hours.timezone)
    return local.minute == 0 and local.second == 0 and local.microsecond == 0


def is_within_business_hours(start: datetime, hours: BusinessHours | None = None) -> bool:
    """Check the start hour is inside the business window."""
    hours = hours or BusinessHours.from_settings()
    local = to_zone(start, hours.timezone)
    return hours.open_hour <= local.hour <= hours.last_start_hour


def business_hours_message(hours: BusinessHours | None = None) -> str:
    hours = hours or BusinessHours.from_settings()
    return (
        f"Bookings must start between {hours.open_hour:02d}:00 "
        f"and {hours.last_start_hour:02d}:00"
    )


def can_view_booking(
    actor_id: str,
    actor_role: UserRole | str,
    owner_id: str,
    specialist_user_id: str | None,
) -> bool:
    """Owner, the booked specialist, or anyone who can read all bookings."""
    if actor_id == owner_id:
        return True
    if specialist_user_id is not None and actor_id == specialist_user_id:
        return True
    return RBACService.has_permission(actor_role, Permission.BOOKINGS_READ_ALL)


def can_modify_booking(actor_id: str, actor_role: UserRole | str, owner_id: str) -> bool:
    """Owner or anyone allowed to manage every booking."""
    if actor_id == owner_id:
        return True
    return RBACService.has_permission(actor_role, Permission.BOOKINGS_MANAGE_ANY)


def can_cancel(
    actor_role: UserRole | str,
    start_time: datetime,
    now: datetime,
    cutoff_minutes: int | None = None,
) -> tuple[bool, str]:
    """Check whether a booking may be cancelled now.

    Non-admin actors must cancel strictly more than ``cutoff_minutes``
    before the start. Admins bypass the cutoff entirely.

    Args:
        actor_role: Role of the user cancelling
        start_time: Start of the booking being cancelled
        now: Current instant
        cutoff_minutes: Override of the configured cutoff

    Returns:
        Tuple of (allowed, message)
    """
    if RBACService.has_permission(actor_role, Permission.BOOKINGS_CANCEL_LATE):
        return True, "Booking cancelled"

    if cutoff_minutes is None:
        cutoff_minutes = settings.cancellation_cutoff_minutes
    cutoff = timedelta(minutes=cutoff_minutes)

    if ensure_utc(now) + cutoff >= ensure_utc(start_time):
        return (
            False,
            f"Bookings can only be cancelled more than {cutoff_minutes} minutes "
            "before the start time",
        )

    return True, "Booking cancelled"
