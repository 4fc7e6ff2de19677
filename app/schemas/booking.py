"""Booking schemas.

Request fields are plain optional strings: presence and format are checked
by the booking rule pipeline so that its error order holds for every input.
"""

from datetime import date

from app.schemas.common import CamelModel, EnumStr, UtcDatetime
from app.schemas.service import ServiceRead
from app.schemas.specialist import SpecialistRead
from app.schemas.user import UserRead


class BookingCreate(CamelModel):
    """Booking request as sent by a client."""

    service_id: str | None = None
    specialist_id: str | None = None
    service_date: str | None = None
    start_time: str | None = None
    end_time: str | None = None


class BookingUpdate(CamelModel):
    """Partial booking update. Omitted fields are left untouched."""

    service_id: str | None = None
    specialist_id: str | None = None
    service_date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    status: str | None = None


class BookingRead(CamelModel):
    """Booking with its user, service and specialist populated."""

    id: str
    service_date: date
    start_time: UtcDatetime
    end_time: UtcDatetime
    status: EnumStr
    user: UserRead
    service: ServiceRead
    specialist: SpecialistRead
    created_at: UtcDatetime | None = None

