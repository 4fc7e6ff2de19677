"""Database models for the booking platform."""

from app.models.booking import Booking, BookingStatus
from app.models.service import Service
from app.models.specialist import Specialist
from app.models.user import User, UserRole

__all__ = [
    # Accounts
    "User",
    "UserRole",
    "Specialist",
    # Catalog
    "Service",
    # Bookings
    "Booking",
    "BookingStatus",
]
