"""Profile management API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from src.modules.auth.dependencies import CurrentIdentity
from src.modules.auth.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InvalidEmailError,
)
from src.modules.auth.models import Identity
from src.modules.auth.schemas import UserProfile
from src.modules.users.schemas import DescriptionUpdate, EmailUpdate
from src.modules.users.service import UserService

router = APIRouter(prefix="/users", tags=["users"])

# Configured during app startup
_user_service: UserService | None = None


def get_user_service() -> UserService:
    """Get the user service instance."""
    if _user_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="User service not configured",
        )
    return _user_service


def set_user_service(service: UserService | None) -> None:
    """Set the user service instance during app startup."""
    global _user_service
    _user_service = service


def _require_owner(identity: Identity, user_id: UUID) -> None:
    if identity.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot modify another account",
        )


def _not_found(e: AccountNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=list[UserProfile], summary="List accounts")
async def list_users(
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserProfile]:
    users = await user_service.list_users()
    return [UserProfile.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserProfile, summary="Get an account")
async def get_user(
    user_id: UUID,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserProfile:
    try:
        user = await user_service.get_user(user_id)
    except AccountNotFoundError as e:
        raise _not_found(e) from e
    return UserProfile.model_validate(user)


@router.patch(
    "/{user_id}/description",
    response_model=UserProfile,
    summary="Update profile description",
)
async def update_description(
    user_id: UUID,
    data: DescriptionUpdate,
    identity: CurrentIdentity,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserProfile:
    """Replace the caller's own profile description."""
    _require_owner(identity, user_id)
    try:
        user = await user_service.update_description(user_id, data.description)
    except AccountNotFoundError as e:
        raise _not_found(e) from e
    return UserProfile.model_validate(user)


@router.patch(
    "/{user_id}/email",
    response_model=UserProfile,
    summary="Update login email",
)
async def update_email(
    user_id: UUID,
    data: EmailUpdate,
    identity: CurrentIdentity,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserProfile:
    """Change the caller's own login email."""
    _require_owner(identity, user_id)
    try:
        user = await user_service.update_email(user_id, data.email)
    except InvalidEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(e)
        ) from e
    except AccountAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except AccountNotFoundError as e:
        raise _not_found(e) from e
    return UserProfile.model_validate(user)
