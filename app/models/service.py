"""Bookable service model."""

from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin

DEFAULT_DURATION_MINUTES = 60


class Service(Base, TimestampMixin):
    """Priced offering customers can book.

    ``is_active`` is a soft-disable: inactive services stay in the database
    but are hidden from non-admin listings and cannot be booked.
    """

    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
        CheckConstraint("duration_minutes >= 0", name="duration_non_negative"),
    )

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    duration_minutes: Mapped[int] = mapped_column(
        Integer,
        default=DEFAULT_DURATION_MINUTES,
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Service {self.title}>"
