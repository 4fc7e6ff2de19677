"""Booking model."""

from datetime import date, datetime
from enum import Enum

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.service import Service
from app.models.specialist import Specialist
from app.models.user import User


class BookingStatus(str, Enum):
    """Lifecycle state of a booking. Only BOOKED blocks a slot."""

    BOOKED = "booked"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Partial unique index guarding against concurrent double-booking of a slot
SLOT_UNIQUE_INDEX = "uq_bookings_specialist_slot_booked"


class Booking(Base, TimestampMixin):
    """Reservation of a specialist for a service on a date and time window."""

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="end_after_start"),
        Index(
            SLOT_UNIQUE_INDEX,
            "specialist_id",
            "service_date",
            "start_time",
            unique=True,
            postgresql_where=text("status = 'booked'"),
            sqlite_where=text("status = 'booked'"),
        ),
        Index("ix_bookings_specialist_date", "specialist_id", "service_date"),
    )

    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("services.id", ondelete="RESTRICT"),
        nullable=False,
    )
    specialist_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("specialists.id", ondelete="CASCADE"),
        nullable=False,
    )
    service_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    end_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    status: Mapped[BookingStatus] = mapped_column(
        String(20),
        default=BookingStatus.BOOKED,
        nullable=False,
        index=True,
    )

    user: Mapped[User] = relationship(User)
    service: Mapped[Service] = relationship(Service)
    specialist: Mapped[Specialist] = relationship(Specialist)

    @property
    def status_value(self) -> str:
        return self.status.value if hasattr(self.status, "value") else str(self.status)

    def __repr__(self) -> str:
        return f"<Booking {self.id[:8]}... {self.start_time} status={self.status_value}>"
