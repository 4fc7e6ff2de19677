"""Profile endpoints for the authenticated user."""

from fastapi import APIRouter, status

from app.api.deps import CurrentUser, DbSession
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.user import PasswordUpdate, ProfileUpdate, UserRead
from app.services.user import UserService

router = APIRouter()


@router.get(
    "/profile",
    response_model=DataResponse[UserRead],
    summary="Get own profile",
)
async def get_profile(user: CurrentUser) -> DataResponse[UserRead]:
    return DataResponse(data=UserRead.model_validate(user))


@router.put(
    "/profile",
    response_model=DataResponse[UserRead],
    summary="Update own profile",
)
async def update_profile(
    payload: ProfileUpdate,
    user: CurrentUser,
    session: DbSession,
) -> DataResponse[UserRead]:
    """Update name, email or phone of the authenticated user."""
    user_service = UserService(session)
    updated = await user_service.update_profile(
        user.id,
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
    )
    return DataResponse(data=UserRead.model_validate(updated))


@router.put(
    "/profile/password",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Change own password",
)
async def update_password(
    payload: PasswordUpdate,
    user: CurrentUser,
    session: DbSession,
) -> MessageResponse:
    user_service = UserService(session)
    await user_service.update_password(user.id, payload.password)
    return MessageResponse(message="Password updated")
