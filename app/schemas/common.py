"""Shared schema building blocks: camelCase base model and envelopes."""

import re
from datetime import datetime
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from app.utils.time import ensure_utc

T = TypeVar("T")

# Stored instants come back naive from some drivers; always emit UTC
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]

# Enum columns hold enum members in-session and plain strings once loaded
EnumStr = Annotated[str, BeforeValidator(lambda v: getattr(v, "value", v))]


def validate_email_lenient(v: str) -> str:
    """Validate email with lenient rules that allow .local domains for testing."""
    if not v or "@" not in v:
        raise ValueError("Invalid email address")
    pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    if not re.match(pattern, v):
        raise ValueError("Invalid email address format")
    return v.lower()


LenientEmail = Annotated[str, AfterValidator(validate_email_lenient)]


class CamelModel(BaseModel):
    """Base model exchanging camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(BaseModel, Generic[T]):
    """Success envelope around a single payload."""

    status: Literal["success"] = "success"
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Success envelope around a list, with its length."""

    status: Literal["success"] = "success"
    results: int
    data: list[T]

    @classmethod
    def of(cls, items: list) -> "ListResponse[T]":
        return cls(results=len(items), data=items)


class MessageResponse(BaseModel):
    """Success envelope carrying only a message."""

    status: Literal["success"] = "success"
    message: str


class ErrorResponse(BaseModel):
    """Failure envelope."""

    status: Literal["fail", "error"]
    message: str
