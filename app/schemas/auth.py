"""Authentication schemas."""

from pydantic import BaseModel, Field

from app.schemas.common import LenientEmail
from app.schemas.user import UserRead


class RegisterRequest(BaseModel):
    """Customer self-registration."""

    name: str = Field(min_length=1, max_length=150)
    email: LenientEmail
    password: str = Field(min_length=8, max_length=128)
    phone: str | None = Field(default=None, max_length=30)


class LoginRequest(BaseModel):
    """Login with email and password."""

    email: LenientEmail
    password: str = Field(min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """JWT token response with the authenticated user."""

    status: str = "success"
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    data: UserRead
