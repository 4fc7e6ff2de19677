"""Specialist profile model."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.user import User


class Specialist(Base, TimestampMixin):
    """Bookable provider profile.

    Owned by exactly one ``User`` with role ``specialist``. Bookings point at
    the profile id, never at the user id.
    """

    __tablename__ = "specialists"
    __table_args__ = (
        CheckConstraint("years_experience >= 0", name="years_experience_non_negative"),
    )

    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    # Patient-facing bio
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    # Classification tier (e.g. "junior", "senior", "top")
    classification: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    years_experience: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    user: Mapped[User] = relationship(User, lazy="joined")

    def __repr__(self) -> str:
        return f"<Specialist {self.id} user={self.user_id}>"
