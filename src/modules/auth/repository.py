"""User repository for database operations."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog

from src.infrastructure.database import Database, PersistenceError
from src.modules.auth.exceptions import AccountAlreadyExistsError
from src.modules.auth.models import User

logger = structlog.get_logger()

# Columns that may be changed through update()
_UPDATABLE_FIELDS = frozenset(
    {"email", "first_name", "last_name", "description", "profile_picture"}
)


def _is_email_conflict(error: sqlite3.Error) -> bool:
    return isinstance(error, sqlite3.IntegrityError) and "users.email" in str(error)


@contextmanager
def _store_errors(operation: str, *, email: str | None = None) -> Iterator[None]:
    """Translate sqlite errors into domain errors.

    A UNIQUE violation on the email column becomes AccountAlreadyExistsError
    when ``email`` is given; anything else becomes PersistenceError.
    """
    try:
        yield
    except sqlite3.Error as e:
        if email is not None and _is_email_conflict(e):
            raise AccountAlreadyExistsError(email) from e
        logger.error("database_error", operation=operation, error=str(e))
        raise PersistenceError(operation, str(e)) from e


class UserRepository:
    """Repository for User CRUD operations.

    SQLite implementation of the CredentialStore protocol. Email uniqueness
    is enforced by the table's UNIQUE constraint, so concurrent creations
    with the same email cannot both succeed.
    """

    def __init__(self, database: Database) -> None:
        """Initialize the repository.

        Args:
            database: Database connection.
        """
        self._db = database

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
        """Create a new user.

        Args:
            email: User's email address, stored as given.
            hashed_password: Bcrypt-hashed password.
            first_name: User's first name.
            last_name: User's last name.
            description: Profile description.
            profile_picture: Optional profile picture path or URL.

        Returns:
            The created User.

        Raises:
            AccountAlreadyExistsError: If email already exists.
            PersistenceError: If the insert fails for another reason.
        """
        user_id = uuid4()
        now = datetime.now(UTC).isoformat()

        with _store_errors("create_user", email=email):
            await self._db.execute(
                """
                INSERT INTO users (id, email, hashed_password, first_name,
                                   last_name, profile_picture, description,
                                   created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(user_id),
                    email,
                    hashed_password,
                    first_name,
                    last_name,
                    profile_picture,
                    description,
                    now,
                    now,
                ),
            )

        logger.info("user_created", user_id=str(user_id), email=email)

        return User(
            id=user_id,
            email=email,
            hashed_password=hashed_password,
            first_name=first_name,
            last_name=last_name,
            profile_picture=profile_picture,
            description=description,
            created_at=datetime.fromisoformat(now),
            updated_at=datetime.fromisoformat(now),
        )

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user's UUID.

        Returns:
            User if found, None otherwise.
        """
        with _store_errors("get_user_by_id"):
            row = await self._db.fetch_one(
                "SELECT * FROM users WHERE id = ?",
                (str(user_id),),
            )

        if row is None:
            return None

        return User.from_row(dict(row))

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email.

        The match is exact: emails are case-sensitive as stored.

        Args:
            email: The user's email address.

        Returns:
            User if found, None otherwise.
        """
        with _store_errors("get_user_by_email"):
            row = await self._db.fetch_one(
                "SELECT * FROM users WHERE email = ?",
                (email,),
            )

        if row is None:
            return None

        return User.from_row(dict(row))

    async def update(self, user_id: UUID, **fields: object) -> User | None:
        """Update profile fields of a user.

        Args:
            user_id: The user's UUID.
            **fields: Column values to set. Only profile columns are allowed.

        Returns:
            The updated User, or None if no user has this id.

        Raises:
            ValueError: If an unknown or protected field is given.
            AccountAlreadyExistsError: If the new email is taken.
            PersistenceError: If the update fails for another reason.
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        if not fields:
            return await self.get_by_id(user_id)

        now = datetime.now(UTC).isoformat()
        columns = sorted(fields)
        assignments = ", ".join(f"{column} = ?" for column in columns)
        parameters = (*(fields[column] for column in columns), now, str(user_id))

        new_email = fields.get("email")
        with _store_errors(
            "update_user", email=str(new_email) if new_email is not None else None
        ):
            cursor = await self._db.execute(
                f"UPDATE users SET {assignments}, updated_at = ? WHERE id = ?",  # nosec B608 - columns are whitelisted
                parameters,
            )

        if cursor.rowcount == 0:
            return None

        logger.info("user_updated", user_id=str(user_id), fields=columns)

        return await self.get_by_id(user_id)

    async def list_all(self) -> list[User]:
        """List all users.

        Returns:
            List of users, oldest first.
        """
        with _store_errors("list_users"):
            rows = await self._db.fetch_all("SELECT * FROM users ORDER BY created_at")

        return [User.from_row(dict(row)) for row in rows]
