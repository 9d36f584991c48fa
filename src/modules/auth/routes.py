"""Authentication API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.config import Settings, get_settings
from src.modules.auth.dependencies import CurrentIdentity, get_auth_service
from src.modules.auth.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AuthenticationError,
)
from src.modules.auth.schemas import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserProfile,
)
from src.modules.auth.service import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _check_password_length(password: str, settings: Settings) -> None:
    if len(password) < settings.password_min_length:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=(
                f"Password must be at least {settings.password_min_length} characters"
            ),
        )


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="Create an account and receive a bearer token.",
)
async def register(
    data: UserCreate,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    """Register a new account and return a bearer token."""
    _check_password_length(data.password, settings)

    try:
        return await auth_service.register(
            data.email,
            data.password,
            data.first_name,
            last_name=data.last_name,
            description=data.description,
        )
    except AccountAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="Authenticate and receive a bearer token.",
)
async def login(
    data: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    """Authenticate user and return a bearer token."""
    _check_password_length(data.password, settings)

    try:
        return await auth_service.login(data.email, data.password)
    except AccountNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


@router.get(
    "",
    response_model=UserProfile,
    summary="Current account",
    description="Return the profile of the account owning the bearer token.",
)
async def current_user(
    identity: CurrentIdentity,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserProfile:
    """Return the caller's public profile."""
    try:
        user = await auth_service.get_current_user(identity)
    except AccountNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e

    return UserProfile.model_validate(user)
