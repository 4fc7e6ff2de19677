"""Authentication endpoints."""

from fastapi import APIRouter, status

from app.api.deps import CurrentUser, DbSession
from app.core.config import settings
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.user import UserRead
from app.services.auth import AuthService

router = APIRouter()


@router.post(
    "/register",
    response_model=DataResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer",
)
async def register(
    payload: RegisterRequest,
    session: DbSession,
) -> DataResponse[UserRead]:
    """Create a customer account."""
    auth_service = AuthService(session)
    user = await auth_service.register_customer(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
    )
    return DataResponse(data=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Login",
    description="Authenticate with email and password",
)
async def login(
    credentials: LoginRequest,
    session: DbSession,
) -> TokenResponse:
    """Authenticate a user and return a JWT carrying id and role.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password wrong
    """
    auth_service = AuthService(session)
    user = await auth_service.authenticate(
        email=credentials.email,
        password=credentials.password,
    )

    return TokenResponse(
        token=auth_service.create_token(user),
        expires_in=settings.access_token_expire_minutes * 60,
        data=UserRead.model_validate(user),
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout",
    description="Tokens are stateless; clients discard theirs",
)
async def logout(user: CurrentUser) -> MessageResponse:
    return MessageResponse(message="Logged out")
