"""Profile management service."""

from uuid import UUID

import structlog

from src.infrastructure.observability import traced
from src.modules.auth.exceptions import AccountNotFoundError
from src.modules.auth.models import User
from src.modules.auth.protocol import CredentialStore
from src.modules.auth.schemas import normalize_email

logger = structlog.get_logger()


class UserService:
    """Read and edit public profiles.

    Password changes are not handled here; the stored hash is never
    touched by profile updates.
    """

    def __init__(self, repository: CredentialStore) -> None:
        self._repo = repository

    async def list_users(self) -> list[User]:
        return await self._repo.list_all()

    async def get_user(self, user_id: UUID) -> User:
        """Get one user.

        Raises:
            AccountNotFoundError: If no user has this id.
        """
        user = await self._repo.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError(str(user_id))
        return user

    @traced(span_name="users.update_description")
    async def update_description(self, user_id: UUID, description: str) -> User:
        """Replace a user's profile description.

        Raises:
            AccountNotFoundError: If no user has this id.
        """
        user = await self._repo.update(user_id, description=description)
        if user is None:
            raise AccountNotFoundError(str(user_id))
        logger.info("description_updated", user_id=str(user_id))
        return user

    @traced(span_name="users.update_email")
    async def update_email(self, user_id: UUID, email: str) -> User:
        """Change the email a user logs in with.

        Args:
            user_id: The user's UUID.
            email: New email address. Stored in normalized form, the same
                form login lookups use.

        Returns:
            The updated User.

        Raises:
            InvalidEmailError: If the address is not well formed.
            AccountAlreadyExistsError: If another account uses the address.
            AccountNotFoundError: If no user has this id.
        """
        user = await self._repo.update(user_id, email=normalize_email(email))
        if user is None:
            raise AccountNotFoundError(str(user_id))
        logger.info("email_updated", user_id=str(user_id))
        return user
