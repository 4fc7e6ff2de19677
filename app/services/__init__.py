"""Business logic services."""

from app.services.auth import AuthService
from app.services.rbac import Permission, RBACService

__all__ = [
    "AuthService",
    "RBACService",
    "Permission",
]
