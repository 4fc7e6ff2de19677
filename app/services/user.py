"""Profile management for the authenticated user."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.core.security import hash_password
from app.models.user import User
from app.services.auth import EmailAlreadyRegisteredError
from app.utils.ids import is_valid_id


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class UserService:
    """Read and update a user's own profile."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get(self, user_id: str) -> User:
        user = await self.session.get(User, user_id) if is_valid_id(user_id) else None
        if not user:
            raise UserNotFoundError()
        return user

    async def get_profile(self, user_id: str) -> User:
        return await self._get(user_id)

    async def update_profile(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> User:
        """Update name, email or phone. Unset arguments are left untouched."""
        user = await self._get(user_id)

        if email is not None and email.lower() != user.email:
            result = await self.session.execute(
                select(User.id).where(User.email == email.lower())
            )
            if result.scalar_one_or_none():
                raise EmailAlreadyRegisteredError("Email is already in use")
            user.email = email.lower()

        if name is not None:
            user.name = name
        if phone is not None:
            user.phone = phone

        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def update_password(self, user_id: str, password: str) -> None:
        """Replace the user's password hash."""
        user = await self._get(user_id)
        user.hashed_password = hash_password(password)
        await self.session.commit()
