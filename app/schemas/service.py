"""Service catalog schemas."""

from pydantic import Field

from app.schemas.common import CamelModel


class ServiceCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    price: float = Field(ge=0)
    duration_minutes: int | None = Field(default=None, ge=0)


class ServiceUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    price: float | None = Field(default=None, ge=0)
    duration_minutes: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class ServiceRead(CamelModel):
    """Service as returned to clients."""

    id: str
    title: str
    price: float
    duration_minutes: int
    is_active: bool
