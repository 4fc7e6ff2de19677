"""Application error taxonomy.

Every domain failure is raised as an ``AppError`` subclass carrying the HTTP
status code it maps to. The exception handlers in ``app.main`` render them
as ``{"status": ..., "message": ...}``.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status(self) -> str:
        """Envelope status: "fail" for client errors, "error" otherwise."""
        return "fail" if 400 <= self.status_code < 500 else "error"


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    """Authenticated, but the role or ownership is insufficient."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class DomainValidationError(AppError):
    """Malformed, missing or out-of-policy fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AppError):
    """The write collides with existing state."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(AppError):
    """Unexpected store or transaction failure."""
