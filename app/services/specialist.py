"""Specialist provisioning and lookup.

A specialist is two rows: a ``User`` with role ``specialist`` and the
``Specialist`` profile that bookings reference. Create, update and delete
touch both and run inside a single ``UnitOfWork``.
"""

import logging
from typing import Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DomainValidationError, NotFoundError
from app.core.logging import audit_logger
from app.core.security import hash_password
from app.db.unit_of_work import UnitOfWork
from app.models.booking import Booking
from app.models.specialist import Specialist
from app.models.user import User, UserRole
from app.services.auth import EmailAlreadyRegisteredError
from app.utils.ids import is_valid_id

logger = logging.getLogger(__name__)


class SpecialistNotFoundError(NotFoundError):
    """Raised when no specialist profile matches the reference."""

    default_message = "Specialist not found"


class SpecialistService:
    """Service for specialist profiles and their backing users."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def resolve_specialist(
        self,
        specialist_ref: str | None,
        for_update: bool = False,
    ) -> Specialist | None:
        """Resolve a specialist by profile id, falling back to user id.

        Callers may identify a specialist either way; the returned profile's
        ``id`` is the canonical reference stored on bookings.

        Args:
            specialist_ref: Profile id or backing user id
            for_update: Lock the profile row (serialises booking writes
                for one specialist on databases that support it)

        Returns:
            Specialist profile or None
        """
        if not is_valid_id(specialist_ref):
            return None

        query = select(Specialist).where(Specialist.id == specialist_ref)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        profile = result.scalar_one_or_none()
        if profile:
            return profile

        query = select(Specialist).where(Specialist.user_id == specialist_ref)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def require_specialist(self, specialist_ref: str | None) -> Specialist:
        """Resolve a specialist or raise ``SpecialistNotFoundError``."""
        profile = await self.resolve_specialist(specialist_ref)
        if not profile:
            raise SpecialistNotFoundError()
        return profile

    async def list_specialists(self) -> Sequence[Specialist]:
        """List all specialist profiles with their users."""
        result = await self.session.execute(
            select(Specialist).join(Specialist.user).order_by(User.name)
        )
        return result.scalars().all()

    async def _ensure_email_free(self, email: str, exclude_user_id: str | None = None) -> None:
        query = select(User.id).where(User.email == email.lower())
        if exclude_user_id:
            query = query.where(User.id != exclude_user_id)
        result = await self.session.execute(query)
        if result.scalar_one_or_none():
            raise EmailAlreadyRegisteredError()

    async def create_specialist(
        self,
        name: str,
        email: str,
        password: str,
        description: str,
        classification: str,
        years_experience: int,
        actor_id: str | None = None,
        phone: str | None = None,
    ) -> Specialist:
        """Create a specialist user and profile atomically.

        Both rows are written or neither is.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
            DomainValidationError: If a profile constraint is violated
        """
        await self._ensure_email_free(email)

        try:
            async with UnitOfWork(self.session, name="create_specialist"):
                user = User(
                    name=name,
                    email=email.lower(),
                    hashed_password=hash_password(password),
                    role=UserRole.SPECIALIST,
                    phone=phone,
                )
                self.session.add(user)
                await self.session.flush()

                profile = Specialist(
                    user_id=user.id,
                    description=description,
                    classification=classification,
                    years_experience=years_experience,
                )
                self.session.add(profile)
                await self.session.flush()
                profile_id = profile.id
        except IntegrityError as exc:
            raise DomainValidationError("Invalid specialist profile") from exc

        audit_logger.log(
            action="specialist_created",
            actor_role=UserRole.ADMIN.value,
            actor_id=actor_id,
            entity_type="specialist",
            entity_id=profile_id,
            metadata={"user_id": user.id},
        )
        return await self._reload(profile_id)

    async def update_specialist(
        self,
        specialist_ref: str,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        description: str | None = None,
        classification: str | None = None,
        years_experience: int | None = None,
        actor_id: str | None = None,
    ) -> Specialist:
        """Update a profile and its backing user in one transaction."""
        profile = await self.require_specialist(specialist_ref)
        user = profile.user

        if email:
            await self._ensure_email_free(email, exclude_user_id=user.id)

        try:
            async with UnitOfWork(self.session, name="update_specialist"):
                if name:
                    user.name = name
                if email:
                    user.email = email.lower()
                if password:
                    user.hashed_password = hash_password(password)

                if description:
                    profile.description = description
                if classification:
                    profile.classification = classification
                if years_experience is not None:
                    profile.years_experience = years_experience
        except IntegrityError as exc:
            raise DomainValidationError("Invalid specialist profile") from exc

        audit_logger.log(
            action="specialist_updated",
            actor_role=UserRole.ADMIN.value,
            actor_id=actor_id,
            entity_type="specialist",
            entity_id=profile.id,
            metadata={"password_changed": bool(password)},
        )
        return await self._reload(profile.id)

    async def delete_specialist(self, specialist_ref: str, actor_id: str | None = None) -> None:
        """Delete a profile, its bookings and its backing user atomically."""
        profile = await self.require_specialist(specialist_ref)
        profile_id = profile.id
        user_id = profile.user_id

        async with UnitOfWork(self.session, name="delete_specialist"):
            result = await self.session.execute(
                delete(Booking)
                .where(
                    or_(
                        Booking.specialist_id == profile_id,
                        Booking.user_id == user_id,
                    )
                )
                .execution_options(synchronize_session="evaluate")
            )
            await self.session.delete(profile)
            await self.session.flush()
            user = await self.session.get(User, user_id)
            if user:
                await self.session.delete(user)

        audit_logger.log(
            action="specialist_deleted",
            actor_role=UserRole.ADMIN.value,
            actor_id=actor_id,
            entity_type="specialist",
            entity_id=profile_id,
            metadata={"user_id": user_id, "bookings_deleted": result.rowcount},
        )

    async def _reload(self, profile_id: str) -> Specialist:
        result = await self.session.execute(
            select(Specialist)
            .where(Specialist.id == profile_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
