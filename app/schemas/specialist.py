"""Specialist profile schemas."""

from pydantic import Field

from app.schemas.common import CamelModel, LenientEmail
from app.schemas.user import UserRead


class SpecialistCreate(CamelModel):
    """Admin request creating a specialist user and profile together."""

    name: str = Field(min_length=1, max_length=150)
    email: LenientEmail
    password: str = Field(min_length=8, max_length=128)
    phone: str | None = Field(default=None, max_length=30)
    description: str = Field(min_length=1)
    classification: str = Field(min_length=1, max_length=50)
    # Range is enforced by the database check constraint
    years_experience: int


class SpecialistUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=150)
    email: LenientEmail | None = None
    password: str | None = Field(default=None, min_length=8, max_length=128)
    description: str | None = None
    classification: str | None = Field(default=None, max_length=50)
    years_experience: int | None = None


class SpecialistRead(CamelModel):
    """Specialist profile with its backing user."""

    id: str
    user_id: str
    description: str
    classification: str
    years_experience: int
    user: UserRead
