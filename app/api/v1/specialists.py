"""Specialist profile endpoints.

Reads are public so clients can pick a specialist before signing in;
writes are admin-only.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import DbSession, require_permissions
from app.models.user import User
from app.schemas.common import DataResponse, ListResponse
from app.schemas.specialist import SpecialistCreate, SpecialistRead, SpecialistUpdate
from app.services.rbac import Permission
from app.services.specialist import SpecialistService

router = APIRouter()

SpecialistAdmin = Annotated[User, Depends(require_permissions(Permission.SPECIALISTS_WRITE))]


@router.post(
    "",
    response_model=DataResponse[SpecialistRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a specialist",
    description="Creates the specialist user and profile in one transaction",
)
async def create_specialist(
    payload: SpecialistCreate,
    admin: SpecialistAdmin,
    session: DbSession,
) -> DataResponse[SpecialistRead]:
    specialist_service = SpecialistService(session)
    profile = await specialist_service.create_specialist(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        description=payload.description,
        classification=payload.classification,
        years_experience=payload.years_experience,
        actor_id=admin.id,
        phone=payload.phone,
    )
    return DataResponse(data=SpecialistRead.model_validate(profile))


@router.get(
    "",
    response_model=ListResponse[SpecialistRead],
    summary="List specialists",
)
async def list_specialists(session: DbSession) -> ListResponse[SpecialistRead]:
    specialist_service = SpecialistService(session)
    profiles = await specialist_service.list_specialists()
    return ListResponse.of([SpecialistRead.model_validate(p) for p in profiles])


@router.get(
    "/{specialist_id}",
    response_model=DataResponse[SpecialistRead],
    summary="Get a specialist",
    description="Accepts the profile id or the specialist's user id",
)
async def get_specialist(
    specialist_id: str,
    session: DbSession,
) -> DataResponse[SpecialistRead]:
    specialist_service = SpecialistService(session)
    profile = await specialist_service.require_specialist(specialist_id)
    return DataResponse(data=SpecialistRead.model_validate(profile))


@router.put(
    "/{specialist_id}",
    response_model=DataResponse[SpecialistRead],
    summary="Update a specialist",
)
async def update_specialist(
    specialist_id: str,
    payload: SpecialistUpdate,
    admin: SpecialistAdmin,
    session: DbSession,
) -> DataResponse[SpecialistRead]:
    specialist_service = SpecialistService(session)
    profile = await specialist_service.update_specialist(
        specialist_id,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        description=payload.description,
        classification=payload.classification,
        years_experience=payload.years_experience,
        actor_id=admin.id,
    )
    return DataResponse(data=SpecialistRead.model_validate(profile))


@router.delete(
    "/{specialist_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a specialist",
    description="Removes the profile, its backing user and all their bookings",
)
async def delete_specialist(
    specialist_id: str,
    admin: SpecialistAdmin,
    session: DbSession,
) -> Response:
    specialist_service = SpecialistService(session)
    await specialist_service.delete_specialist(specialist_id, actor_id=admin.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
