"""User profile schemas."""

from pydantic import Field

from app.schemas.common import CamelModel, EnumStr, LenientEmail, UtcDatetime


class UserRead(CamelModel):
    """Public view of a user. Never carries the password hash."""

    id: str
    name: str
    email: str
    role: EnumStr
    phone: str | None = None
    created_at: UtcDatetime | None = None


class ProfileUpdate(CamelModel):
    """Partial profile update."""

    name: str | None = Field(default=None, min_length=1, max_length=150)
    email: LenientEmail | None = None
    phone: str | None = Field(default=None, max_length=30)


class PasswordUpdate(CamelModel):
    password: str = Field(min_length=8, max_length=128)
