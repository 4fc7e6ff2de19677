"""Pydantic schemas for request/response validation."""

from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.schemas.booking import BookingCreate, BookingRead, BookingUpdate
from app.schemas.common import (
    CamelModel,
    DataResponse,
    ErrorResponse,
    ListResponse,
    MessageResponse,
)
from app.schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from app.schemas.specialist import SpecialistCreate, SpecialistRead, SpecialistUpdate
from app.schemas.user import PasswordUpdate, ProfileUpdate, UserRead

__all__ = [
    "CamelModel",
    "DataResponse",
    "ListResponse",
    "MessageResponse",
    "ErrorResponse",
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserRead",
    "ProfileUpdate",
    "PasswordUpdate",
    "ServiceCreate",
    "ServiceUpdate",
    "ServiceRead",
    "SpecialistCreate",
    "SpecialistUpdate",
    "SpecialistRead",
    "BookingCreate",
    "BookingUpdate",
    "BookingRead",
]
