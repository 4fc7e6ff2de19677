"""Role-Based Access Control (RBAC) service."""

from enum import Enum

from app.models.user import UserRole


class Permission(str, Enum):
    """Available permissions in the system."""

    # Bookings
    BOOKINGS_CREATE = "bookings:create"
    BOOKINGS_READ_ALL = "bookings:read:all"
    BOOKINGS_MANAGE_ANY = "bookings:manage:any"  # change/delete bookings owned by others
    BOOKINGS_CANCEL_LATE = "bookings:cancel:late"  # bypass the cancellation cutoff
    BOOKINGS_REASSIGN = "bookings:reassign"  # move a booking to another specialist
    BOOKINGS_COMPLETE = "bookings:complete"  # mark a booking completed by hand

    # Catalog
    SERVICES_READ = "services:read"
    SERVICES_READ_INACTIVE = "services:read:inactive"
    SERVICES_WRITE = "services:write"

    # Specialist provisioning
    SPECIALISTS_WRITE = "specialists:write"


# Role to permissions mapping
ROLE_PERMISSIONS: dict[UserRole, set[Permission]] = {
    UserRole.ADMIN: set(Permission),
    UserRole.SPECIALIST: {
        Permission.BOOKINGS_CREATE,
        Permission.SERVICES_READ,
    },
    UserRole.CUSTOMER: {
        Permission.BOOKINGS_CREATE,
        Permission.SERVICES_READ,
    },
}


class RBACService:
    """Service for checking role-based permissions."""

    @staticmethod
    def _as_role(role: UserRole | str) -> UserRole | None:
        try:
            return UserRole(role)
        except ValueError:
            return None

    @classmethod
    def get_permissions(cls, role: UserRole | str) -> set[Permission]:
        """Get all permissions for a role. Unknown roles get none."""
        resolved = cls._as_role(role)
        if resolved is None:
            return set()
        return ROLE_PERMISSIONS.get(resolved, set())

    @classmethod
    def has_permission(cls, role: UserRole | str, permission: Permission) -> bool:
        """Check if role has a specific permission."""
        return permission in cls.get_permissions(role)

    @classmethod
    def has_all_permissions(
        cls, role: UserRole | str, permissions: list[Permission]
    ) -> bool:
        """Check if role has all of the specified permissions."""
        role_permissions = cls.get_permissions(role)
        return all(p in role_permissions for p in permissions)
