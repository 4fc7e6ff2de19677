"""User model for customers, specialists and administrators."""

from enum import Enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class UserRole(str, Enum):
    """User roles for RBAC."""

    CUSTOMER = "customer"
    SPECIALIST = "specialist"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    """Account identity.

    Customers book appointments, specialists are booked through their
    ``Specialist`` profile, admins manage services and specialists.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        String(20),
        default=UserRole.CUSTOMER,
        nullable=False,
    )
    phone: Mapped[str | None] = mapped_column(
        String(30),
        nullable=True,
    )

    @property
    def role_value(self) -> str:
        """Role as a plain string (stored values come back as str)."""
        return self.role.value if hasattr(self.role, "value") else str(self.role)

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role_value})>"
