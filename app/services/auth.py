"""Authentication service: registration, login and token issuance."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, UnauthorizedError
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User, UserRole
from app.utils.ids import is_valid_id

logger = logging.getLogger(__name__)


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when an account with the email already exists."""

    default_message = "User already exists"


class InvalidCredentialsError(UnauthorizedError):
    """Raised on a failed login. Deliberately vague."""

    default_message = "Invalid email or password"


class AuthService:
    """Service for handling authentication operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by (case-insensitive) email address."""
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: str) -> User | None:
        """Get user by ID. Malformed ids resolve to None."""
        if not is_valid_id(user_id):
            return None
        return await self.session.get(User, user_id)

    async def register_customer(
        self,
        name: str,
        email: str,
        password: str,
        phone: str | None = None,
    ) -> User:
        """Create a customer account.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        if await self.get_user_by_email(email):
            raise EmailAlreadyRegisteredError()

        user = User(
            name=name,
            email=email.lower(),
            hashed_password=hash_password(password),
            role=UserRole.CUSTOMER,
            phone=phone,
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)

        logger.info(f"Registered customer {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Authenticate a user with email and password.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password wrong
        """
        user = await self.get_user_by_email(email)

        if not user or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError()

        return user

    def create_token(self, user: User) -> str:
        """Issue a bearer token carrying the user's id and role."""
        return create_access_token(
            subject=user.id,
            additional_claims={"role": user.role_value},
        )
