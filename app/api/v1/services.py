"""Service catalog endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import CurrentUser, DbSession, require_permissions
from app.core.errors import ForbiddenError
from app.schemas.common import DataResponse, ListResponse
from app.schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from app.services.catalog import CatalogService
from app.services.rbac import Permission, RBACService

router = APIRouter()

CatalogWriter = Depends(require_permissions(Permission.SERVICES_WRITE))


@router.post(
    "",
    response_model=DataResponse[ServiceRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[CatalogWriter],
    summary="Create a service",
)
async def create_service(
    payload: ServiceCreate,
    session: DbSession,
) -> DataResponse[ServiceRead]:
    catalog = CatalogService(session)
    service = await catalog.create_service(
        title=payload.title,
        price=payload.price,
        duration_minutes=payload.duration_minutes,
    )
    return DataResponse(data=ServiceRead.model_validate(service))


@router.get(
    "",
    response_model=ListResponse[ServiceRead],
    summary="List services",
    description="Active services; admins may list inactive ones with ?active=false",
)
async def list_services(
    user: CurrentUser,
    session: DbSession,
    active: Annotated[bool | None, Query()] = None,
) -> ListResponse[ServiceRead]:
    """List services visible to the caller."""
    if not RBACService.has_permission(user.role_value, Permission.SERVICES_READ_INACTIVE):
        if active is False:
            raise ForbiddenError("Only admins can list inactive services")
        active = True

    catalog = CatalogService(session)
    services = await catalog.list_services(active=active)
    return ListResponse.of([ServiceRead.model_validate(s) for s in services])


@router.get(
    "/{service_id}",
    response_model=DataResponse[ServiceRead],
    summary="Get a service",
)
async def get_service(
    service_id: str,
    user: CurrentUser,
    session: DbSession,
) -> DataResponse[ServiceRead]:
    catalog = CatalogService(session)
    active_only = not RBACService.has_permission(
        user.role_value, Permission.SERVICES_READ_INACTIVE
    )
    service = await catalog.require_service(service_id, active_only=active_only)
    return DataResponse(data=ServiceRead.model_validate(service))


@router.put(
    "/{service_id}",
    response_model=DataResponse[ServiceRead],
    dependencies=[CatalogWriter],
    summary="Update a service",
)
async def update_service(
    service_id: str,
    payload: ServiceUpdate,
    session: DbSession,
) -> DataResponse[ServiceRead]:
    catalog = CatalogService(session)
    service = await catalog.update_service(
        service_id,
        title=payload.title,
        price=payload.price,
        duration_minutes=payload.duration_minutes,
        is_active=payload.is_active,
    )
    return DataResponse(data=ServiceRead.model_validate(service))


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[CatalogWriter],
    summary="Delete a service",
    description="Fails with 409 while bookings reference the service",
)
async def delete_service(service_id: str, session: DbSession) -> Response:
    catalog = CatalogService(session)
    await catalog.delete_service(service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
