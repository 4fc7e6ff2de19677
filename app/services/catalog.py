"""Service catalog management."""

import logging
from decimal import Decimal
from typing import Sequence

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, DomainValidationError, NotFoundError
from app.models.booking import Booking
from app.models.service import DEFAULT_DURATION_MINUTES, Service
from app.utils.ids import is_valid_id

logger = logging.getLogger(__name__)


class ServiceNotFoundError(NotFoundError):
    default_message = "Service not found"


class ServiceInUseError(ConflictError):
    default_message = "Service has bookings; deactivate it instead of deleting"


def _check_amounts(price: Decimal | float | None, duration: int | None) -> None:
    if price is not None and price < 0:
        raise DomainValidationError("Price cannot be negative")
    if duration is not None and duration < 0:
        raise DomainValidationError("Duration cannot be negative")


class CatalogService:
    """CRUD over bookable services."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_service(self, service_id: str) -> Service | None:
        """Get a service by id. Malformed ids resolve to None."""
        if not is_valid_id(service_id):
            return None
        return await self.session.get(Service, service_id)

    async def require_service(self, service_id: str, active_only: bool = False) -> Service:
        """Get a service or raise ``ServiceNotFoundError``.

        Inactive services count as missing when ``active_only`` is set.
        """
        service = await self.get_service(service_id)
        if not service or (active_only and not service.is_active):
            raise ServiceNotFoundError()
        return service

    async def list_services(self, active: bool | None = None) -> Sequence[Service]:
        """List services ordered by title, optionally filtered by active flag."""
        query = select(Service)
        if active is not None:
            query = query.where(Service.is_active == active)
        query = query.order_by(Service.title)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def create_service(
        self,
        title: str,
        price: Decimal | float,
        duration_minutes: int | None = None,
    ) -> Service:
        """Create an active service."""
        _check_amounts(price, duration_minutes)

        service = Service(
            title=title,
            price=price,
            duration_minutes=duration_minutes or DEFAULT_DURATION_MINUTES,
            is_active=True,
        )
        self.session.add(service)
        await self.session.commit()
        await self.session.refresh(service)

        logger.info(f"Created service {service.id} ({title})")
        return service

    async def update_service(
        self,
        service_id: str,
        title: str | None = None,
        price: Decimal | float | None = None,
        duration_minutes: int | None = None,
        is_active: bool | None = None,
    ) -> Service:
        """Update a service. Unset arguments are left untouched."""
        service = await self.require_service(service_id)
        _check_amounts(price, duration_minutes)

        if title:
            service.title = title
        if price is not None:
            service.price = price
        if duration_minutes is not None:
            service.duration_minutes = duration_minutes
        if is_active is not None:
            service.is_active = is_active

        await self.session.commit()
        await self.session.refresh(service)
        return service

    async def delete_service(self, service_id: str) -> None:
        """Hard-delete a service that no booking references."""
        service = await self.require_service(service_id)

        in_use = await self.session.scalar(
            select(exists().where(Booking.service_id == service.id))
        )
        if in_use:
            raise ServiceInUseError()

        await self.session.delete(service)
        await self.session.commit()
        logger.info(f"Deleted service {service_id}")
