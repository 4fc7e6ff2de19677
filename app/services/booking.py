"""Booking service: creation, mutation, lookup and busy slots.

Every write runs the booking rule pipeline from ``app.booking`` and then
re-checks the specialist's day for overlapping ``booked`` intervals. The
check and the write are serialised per specialist by locking the profile
row, and a partial unique index on (specialist, date, start) for booked
rows backs that up at the storage layer.
"""

import logging
from datetime import date, datetime
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.booking.policy import (
    BusinessHours,
    business_hours_message,
    can_cancel,
    can_modify_booking,
    can_view_booking,
    intervals_overlap,
    is_on_the_hour,
    is_within_business_hours,
)
from app.booking.sweeper import complete_elapsed_bookings
from app.booking.validation import FIELD_RULES, BookingDraft, Rule, run_rules
from app.core.errors import (
    ConflictError,
    DomainValidationError,
    ForbiddenError,
    NotFoundError,
)
from app.core.logging import audit_logger
from app.models.booking import SLOT_UNIQUE_INDEX, Booking, BookingStatus
from app.models.specialist import Specialist
from app.models.user import User
from app.services.catalog import CatalogService, ServiceNotFoundError
from app.services.rbac import Permission, RBACService
from app.services.specialist import SpecialistNotFoundError, SpecialistService
from app.utils.ids import is_valid_id
from app.utils.time import ensure_utc, format_hour_slot, parse_date, parse_datetime, utc_now

logger = logging.getLogger(__name__)


class BookingNotFoundError(NotFoundError):
    """Raised when a booking id matches nothing."""

    default_message = "Booking not found"


class SlotNotAvailableError(ConflictError):
    """Raised when the requested interval overlaps a booked one."""

    default_message = "Time slot already booked"


# Fields whose change re-runs the conflict check
SCHEDULE_FIELDS = frozenset({"service_date", "start_time", "end_time", "specialist_id"})


def _is_slot_index_violation(exc: IntegrityError) -> bool:
    return SLOT_UNIQUE_INDEX in str(exc.orig) or (
        "UNIQUE constraint failed: bookings." in str(exc.orig)
    )


class BookingService:
    """Service for booking lifecycle operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.specialists = SpecialistService(session)
        self.catalog = CatalogService(session)

    # --- Lookups ---

    def _with_references(self, query):
        """Eager-load user, service and specialist (with its user)."""
        return query.options(
            selectinload(Booking.user),
            selectinload(Booking.service),
            selectinload(Booking.specialist).selectinload(Specialist.user),
        ).execution_options(populate_existing=True)

    async def get_booking(self, booking_id: str) -> Booking:
        """Get a booking with its references.

        Raises:
            BookingNotFoundError: If no booking has this id
        """
        if not is_valid_id(booking_id):
            raise BookingNotFoundError()

        result = await self.session.execute(
            self._with_references(select(Booking).where(Booking.id == booking_id))
        )
        booking = result.scalar_one_or_none()
        if not booking:
            raise BookingNotFoundError()
        return booking

    async def get_booking_for_actor(
        self, booking_id: str, actor: User, now: datetime | None = None
    ) -> Booking:
        """Get a booking visible to ``actor``.

        Visible to its owner, the specialist it is booked with, and admins.
        """
        # A failed sweep rolls back and expires loaded objects, actor included
        actor_id, actor_role = actor.id, actor.role_value
        await complete_elapsed_bookings(self.session, now=now)
        booking = await self.get_booking(booking_id)
        if not can_view_booking(
            actor_id,
            actor_role,
            booking.user_id,
            booking.specialist.user_id if booking.specialist else None,
        ):
            raise ForbiddenError("You don't have permission to view this booking")
        return booking

    async def list_user_bookings(
        self, user_id: str, now: datetime | None = None
    ) -> Sequence[Booking]:
        """List bookings made by a user, most recent service date first."""
        await complete_elapsed_bookings(self.session, now=now)
        result = await self.session.execute(
            self._with_references(
                select(Booking)
                .where(Booking.user_id == user_id)
                .order_by(Booking.service_date.desc(), Booking.start_time.desc())
            )
        )
        return result.scalars().all()

    async def list_all_bookings(self, now: datetime | None = None) -> Sequence[Booking]:
        """List every booking, most recent service date first."""
        await complete_elapsed_bookings(self.session, now=now)
        result = await self.session.execute(
            self._with_references(
                select(Booking).order_by(
                    Booking.service_date.desc(), Booking.start_time.desc()
                )
            )
        )
        return result.scalars().all()

    # --- Conflict checking ---

    async def has_conflict(
        self,
        specialist_id: str,
        service_date: date,
        start_time: datetime,
        end_time: datetime,
        exclude_booking_id: str | None = None,
    ) -> bool:
        """Check for a booked interval overlapping ``[start_time, end_time)``.

        Only bookings of the same specialist on the same date with status
        ``booked`` are compared. Back-to-back bookings do not conflict.
        """
        query = select(Booking).where(
            Booking.specialist_id == specialist_id,
            Booking.service_date == service_date,
            Booking.status == BookingStatus.BOOKED,
            Booking.start_time < ensure_utc(end_time),
            Booking.end_time > ensure_utc(start_time),
        )
        if exclude_booking_id:
            query = query.where(Booking.id != exclude_booking_id)

        result = await self.session.execute(query)
        for existing in result.scalars().all():
            if intervals_overlap(
                ensure_utc(start_time),
                ensure_utc(end_time),
                ensure_utc(existing.start_time),
                ensure_utc(existing.end_time),
            ):
                return True
        return False

    async def get_busy_slots(
        self, specialist_ref: str, service_date: date, now: datetime | None = None
    ) -> list[str]:
        """Start hours (``HH:00``) of booked bookings for a specialist and date."""
        await complete_elapsed_bookings(self.session, now=now)
        profile = await self.specialists.require_specialist(specialist_ref)
        result = await self.session.execute(
            select(Booking.start_time)
            .where(
                Booking.specialist_id == profile.id,
                Booking.service_date == service_date,
                Booking.status == BookingStatus.BOOKED,
            )
            .order_by(Booking.start_time)
        )
        zone = BusinessHours.from_settings().timezone
        return [format_hour_slot(start, zone) for start in result.scalars().all()]

    # --- Creation ---

    def creation_rules(self) -> tuple[Rule, ...]:
        """The full ordered pipeline applied to new bookings."""
        return (
            *FIELD_RULES,
            Rule(
                "specialist_exists",
                self._resolve_specialist,
                SpecialistNotFoundError,
                "Specialist not found",
            ),
            Rule(
                "no_conflict",
                self._slot_is_free,
                SlotNotAvailableError,
                "Time slot already booked",
            ),
            Rule(
                "service_exists",
                self._resolve_service,
                ServiceNotFoundError,
                "Service not found",
            ),
        )

    async def _resolve_specialist(self, draft: BookingDraft) -> bool:
        profile = await self.specialists.resolve_specialist(
            draft.specialist_ref, for_update=True
        )
        if profile is None:
            return False
        draft.specialist_id = profile.id
        return True

    async def _slot_is_free(self, draft: BookingDraft) -> bool:
        return not await self.has_conflict(
            draft.specialist_id,
            draft.service_date,
            draft.start_time,
            draft.end_time,
            exclude_booking_id=draft.exclude_booking_id,
        )

    async def _resolve_service(self, draft: BookingDraft) -> bool:
        service = await self.catalog.get_service(draft.service_ref)
        if service is None or not service.is_active:
            return False
        draft.service_id = service.id
        return True

    async def create_booking(
        self,
        actor: User,
        service_id: str | None,
        specialist_id: str | None,
        service_date: str | None,
        start_time: str | None,
        end_time: str | None,
        now: datetime | None = None,
    ) -> Booking:
        """Validate and persist a new booking for ``actor``.

        Raises:
            DomainValidationError: Missing, malformed or out-of-policy fields
            SpecialistNotFoundError: Specialist reference matches nothing
            SlotNotAvailableError: Interval overlaps a booked one
            ServiceNotFoundError: Service missing or inactive
        """
        draft = BookingDraft(
            user_id=actor.id,
            service_ref=service_id,
            specialist_ref=specialist_id,
            raw_service_date=service_date,
            raw_start_time=start_time,
            raw_end_time=end_time,
            now=ensure_utc(now) if now else utc_now(),
        )
        actor_role = actor.role_value

        await complete_elapsed_bookings(self.session, now=draft.now)
        await run_rules(self.creation_rules(), draft)

        booking = Booking(**draft.as_record())
        self.session.add(booking)
        await self._commit_schedule_change()

        audit_logger.log(
            action="booking_created",
            actor_role=actor_role,
            actor_id=draft.user_id,
            entity_type="booking",
            entity_id=booking.id,
            metadata={
                "specialist_id": booking.specialist_id,
                "start_time": draft.start_time.isoformat(),
            },
        )
        return await self.get_booking(booking.id)

    async def _commit_schedule_change(self) -> None:
        """Commit, translating a slot index violation into a conflict."""
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            if _is_slot_index_violation(exc):
                raise SlotNotAvailableError() from exc
            raise

    # --- Mutation ---

    async def update_booking(
        self,
        booking_id: str,
        actor: User,
        changes: dict[str, Any],
        now: datetime | None = None,
    ) -> Booking:
        """Apply a partial update to a booking.

        ``changes`` may hold ``service_date``, ``start_time``, ``end_time``
        (ISO strings), ``status``, ``specialist_id`` and ``service_id``;
        keys with ``None`` values are ignored.

        Raises:
            BookingNotFoundError: Unknown booking
            ForbiddenError: Actor is neither owner nor admin, or attempts an
                admin-only change
            DomainValidationError: Out-of-policy values or a late cancellation
            SlotNotAvailableError: New interval overlaps a booked one
        """
        now = ensure_utc(now) if now else utc_now()
        changes = {key: value for key, value in changes.items() if value is not None}

        booking = await self.get_booking(booking_id)
        role = actor.role_value

        if not can_modify_booking(actor.id, role, booking.user_id):
            raise ForbiddenError("You don't have permission to update this booking")

        updates = await self._resolve_changes(booking, actor, changes, now)

        previous_status = booking.status_value
        for field_name, value in updates.items():
            setattr(booking, field_name, value)
        await self._commit_schedule_change()

        audit_logger.log(
            action="booking_updated",
            actor_role=role,
            actor_id=actor.id,
            entity_type="booking",
            entity_id=booking.id,
            metadata={
                "fields": sorted(updates),
                "previous_status": previous_status,
            },
        )
        return await self.get_booking(booking.id)

    async def _resolve_changes(
        self,
        booking: Booking,
        actor: User,
        changes: dict[str, Any],
        now: datetime,
    ) -> dict[str, Any]:
        """Validate requested changes and return the column values to set."""
        role = actor.role_value
        hours = BusinessHours.from_settings()
        updates: dict[str, Any] = {}

        # Specialist reassignment is admin-only, whatever else is valid
        if "specialist_id" in changes:
            ref = changes["specialist_id"]
            current = booking.specialist
            unchanged = ref in (booking.specialist_id, current.user_id if current else None)
            if not unchanged and not RBACService.has_permission(role, Permission.BOOKINGS_REASSIGN):
                raise ForbiddenError("Only admins can reassign a booking to another specialist")
            if not unchanged:
                profile = await self.specialists.resolve_specialist(ref, for_update=True)
                if profile is None:
                    raise SpecialistNotFoundError()
                updates["specialist_id"] = profile.id

        if "status" in changes:
            new_status = self._parse_status(changes["status"])
            if new_status != booking.status_value:
                if new_status == BookingStatus.COMPLETED.value and not RBACService.has_permission(
                    role, Permission.BOOKINGS_COMPLETE
                ):
                    raise ForbiddenError("Bookings are completed automatically")
                if new_status == BookingStatus.CANCELLED.value:
                    allowed, message = can_cancel(role, booking.start_time, now)
                    if not allowed:
                        raise DomainValidationError(message)
                updates["status"] = BookingStatus(new_status)

        if "service_date" in changes:
            try:
                updates["service_date"] = parse_date(changes["service_date"])
            except (TypeError, ValueError):
                raise DomainValidationError("Invalid date format")

        for field_name in ("start_time", "end_time"):
            if field_name in changes:
                try:
                    updates[field_name] = parse_datetime(changes[field_name])
                except (TypeError, ValueError):
                    raise DomainValidationError("Invalid date format")

        if "start_time" in updates:
            start = updates["start_time"]
            if start < now:
                raise DomainValidationError("startTime cannot be in the past")
            if not is_on_the_hour(start, hours):
                raise DomainValidationError("Bookings must start on the hour")
            if not is_within_business_hours(start, hours):
                raise DomainValidationError(business_hours_message(hours))

        start_time = updates.get("start_time", booking.start_time)
        end_time = updates.get("end_time", booking.end_time)
        if ensure_utc(end_time) <= ensure_utc(start_time):
            raise DomainValidationError("endTime must be after startTime")

        if "service_id" in changes and changes["service_id"] != booking.service_id:
            service = await self.catalog.require_service(changes["service_id"], active_only=True)
            updates["service_id"] = service.id

        final_status = updates.get("status", booking.status_value)
        reinstated = (
            "status" in updates and final_status == BookingStatus.BOOKED.value
        )
        if final_status == BookingStatus.BOOKED.value and (
            reinstated or SCHEDULE_FIELDS & updates.keys()
        ):
            specialist_id = updates.get("specialist_id", booking.specialist_id)
            if "specialist_id" not in updates:
                # Lock the current specialist before re-checking the day
                await self.specialists.resolve_specialist(specialist_id, for_update=True)
            if await self.has_conflict(
                specialist_id,
                updates.get("service_date", booking.service_date),
                start_time,
                end_time,
                exclude_booking_id=booking.id,
            ):
                raise SlotNotAvailableError()

        return updates

    @staticmethod
    def _parse_status(value: Any) -> str:
        try:
            return BookingStatus(value).value
        except ValueError:
            allowed = ", ".join(s.value for s in BookingStatus)
            raise DomainValidationError(f"status must be one of: {allowed}")

    # --- Deletion ---

    async def delete_booking(self, booking_id: str, actor: User) -> None:
        """Hard-delete a booking owned by ``actor`` (or any booking, for admins)."""
        booking = await self.get_booking(booking_id)

        if not can_modify_booking(actor.id, actor.role_value, booking.user_id):
            raise ForbiddenError("You don't have permission to delete this booking")

        await self.session.delete(booking)
        await self.session.commit()

        audit_logger.log(
            action="booking_deleted",
            actor_role=actor.role_value,
            actor_id=actor.id,
            entity_type="booking",
            entity_id=booking_id,
        )
