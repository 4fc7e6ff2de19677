"""Lazy completion of elapsed bookings.

There is no background worker: booking reads and creates call
``complete_elapsed_bookings`` first, which flips every ``booked`` booking
whose end has passed to ``completed`` in one bulk update.
"""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import Booking, BookingStatus
from app.utils.time import utc_now

logger = logging.getLogger(__name__)


async def complete_elapsed_bookings(
    session: AsyncSession,
    now: datetime | None = None,
) -> int:
    """Mark booked bookings that ended before ``now`` as completed.

    Idempotent. Never raises: a failed sweep is logged and rolled back so
    the surrounding request carries on.

    Args:
        session: Database session
        now: Reference instant (defaults to current UTC time)

    Returns:
        Number of bookings transitioned
    """
    now = now or utc_now()

    try:
        elapsed = await session.execute(
            select(Booking.id).where(
                Booking.status == BookingStatus.BOOKED,
                Booking.end_time < now,
            )
        )
        booking_ids = list(elapsed.scalars().all())
        if not booking_ids:
            return 0

        # Criteria are evaluated against loaded objects too, so in-session
        # bookings see the new status without a refresh
        result = await session.execute(
            update(Booking)
            .where(
                Booking.id.in_(booking_ids),
                Booking.status == BookingStatus.BOOKED,
            )
            .values(status=BookingStatus.COMPLETED)
            .execution_options(synchronize_session="evaluate")
        )
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Booking completion sweep failed")
        await session.rollback()
        return 0

    completed = result.rowcount or 0
    if completed:
        logger.info(f"Marked {completed} elapsed booking(s) as completed")
    return completed
