"""Protocol definition for credential storage."""

from typing import Protocol
from uuid import UUID

from src.modules.auth.models import User


class CredentialStore(Protocol):
    """Persistence for user records as seen by the account services.

    Implementations must make ``create`` atomic with respect to email
    uniqueness: of two concurrent creations with the same email, exactly one
    succeeds and the other raises AccountAlreadyExistsError.
    """

    async def get_by_email(self, email: str) -> User | None:
        """Find a user by exact email match."""
        ...

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Find a user by id."""
        ...

    async def create(
        self,
        email: str,
        hashed_password: str,
        first_name: str,
        *,
        last_name: str = "",
        description: str,
        profile_picture: str | None = None,
    ) -> User:
        """Create a user.

        Raises:
            AccountAlreadyExistsError: If the email is already taken.
            PersistenceError: If the store fails.
        """
        ...

    async def update(self, user_id: UUID, **fields: object) -> User | None:
        """Update profile fields of a user.

        Returns:
            The updated user, or None if no user has this id.
        """
        ...

    async def list_all(self) -> list[User]:
        """List all users, oldest first."""
        ...
