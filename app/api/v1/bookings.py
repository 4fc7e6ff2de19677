"""Booking endpoints.

Static paths (``/all``, ``/busy-slots``) are declared before ``/{booking_id}``
so they are not captured as ids.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import CurrentUser, DbSession, require_permissions
from app.core.errors import DomainValidationError
from app.schemas.booking import BookingCreate, BookingRead, BookingUpdate
from app.schemas.common import DataResponse, ListResponse
from app.services.booking import BookingService
from app.services.rbac import Permission
from app.utils.time import parse_date

router = APIRouter()


@router.post(
    "",
    response_model=DataResponse[BookingRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permissions(Permission.BOOKINGS_CREATE))],
    summary="Create a booking",
)
async def create_booking(
    payload: BookingCreate,
    user: CurrentUser,
    session: DbSession,
) -> DataResponse[BookingRead]:
    """Book a slot with a specialist for the authenticated user.

    Raises:
        DomainValidationError: Missing or out-of-policy fields
        SpecialistNotFoundError: Unknown specialist
        SlotNotAvailableError: Slot already booked
    """
    booking_service = BookingService(session)
    booking = await booking_service.create_booking(
        user,
        service_id=payload.service_id,
        specialist_id=payload.specialist_id,
        service_date=payload.service_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )
    return DataResponse(data=BookingRead.model_validate(booking))


@router.get(
    "",
    response_model=ListResponse[BookingRead],
    summary="List own bookings",
)
async def list_my_bookings(
    user: CurrentUser,
    session: DbSession,
) -> ListResponse[BookingRead]:
    booking_service = BookingService(session)
    bookings = await booking_service.list_user_bookings(user.id)
    return ListResponse.of([BookingRead.model_validate(b) for b in bookings])


@router.get(
    "/all",
    response_model=ListResponse[BookingRead],
    dependencies=[Depends(require_permissions(Permission.BOOKINGS_READ_ALL))],
    summary="List all bookings",
)
async def list_all_bookings(session: DbSession) -> ListResponse[BookingRead]:
    booking_service = BookingService(session)
    bookings = await booking_service.list_all_bookings()
    return ListResponse.of([BookingRead.model_validate(b) for b in bookings])


@router.get(
    "/busy-slots",
    response_model=DataResponse[list[str]],
    summary="Busy start hours for a specialist",
    description="Start hours (HH:00) of booked slots for a specialist on a date",
)
async def get_busy_slots(
    session: DbSession,
    specialist_id: Annotated[str | None, Query(alias="specialistId")] = None,
    service_date: Annotated[str | None, Query(alias="date")] = None,
) -> DataResponse[list[str]]:
    if not specialist_id or not service_date:
        raise DomainValidationError("specialistId and date are required")
    try:
        day = parse_date(service_date)
    except ValueError:
        raise DomainValidationError("Invalid date format")

    booking_service = BookingService(session)
    slots = await booking_service.get_busy_slots(specialist_id, day)
    return DataResponse(data=slots)


@router.get(
    "/{booking_id}",
    response_model=DataResponse[BookingRead],
    summary="Get a booking",
)
async def get_booking(
    booking_id: str,
    user: CurrentUser,
    session: DbSession,
) -> DataResponse[BookingRead]:
    booking_service = BookingService(session)
    booking = await booking_service.get_booking_for_actor(booking_id, user)
    return DataResponse(data=BookingRead.model_validate(booking))


@router.put(
    "/{booking_id}",
    response_model=DataResponse[BookingRead],
    summary="Update a booking",
    description="Owner or admin; reschedule, cancel or change service",
)
async def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    user: CurrentUser,
    session: DbSession,
) -> DataResponse[BookingRead]:
    booking_service = BookingService(session)
    booking = await booking_service.update_booking(
        booking_id,
        user,
        payload.model_dump(exclude_unset=True),
    )
    return DataResponse(data=BookingRead.model_validate(booking))


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a booking",
)
async def delete_booking(
    booking_id: str,
    user: CurrentUser,
    session: DbSession,
) -> Response:
    booking_service = BookingService(session)
    await booking_service.delete_booking(booking_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
