"""Account domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    """User domain model.

    Represents a registered account together with its public profile.

    Attributes:
        id: Unique user identifier.
        email: User's email address (used for login, case-sensitive as stored).
        hashed_password: Bcrypt-hashed password.
        first_name: User's first name.
        last_name: User's last name, empty when not provided.
        profile_picture: Optional path or URL of the profile picture.
        description: Free-text profile description.
        created_at: When the user was created.
        updated_at: When the user was last updated.
    """

    id: UUID
    email: str
    hashed_password: str
    first_name: str
    last_name: str
    profile_picture: str | None
    description: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, object]) -> "User":
        """Create a User from a database row.

        Args:
            row: Database row as a dictionary.

        Returns:
            User instance.
        """
        return cls(
            id=UUID(str(row["id"])),
            email=str(row["email"]),
            hashed_password=str(row["hashed_password"]),
            first_name=str(row["first_name"]),
            last_name=str(row["last_name"] or ""),
            profile_picture=(
                str(row["profile_picture"]) if row["profile_picture"] else None
            ),
            description=str(row["description"]),
            created_at=datetime.fromisoformat(str(row["created_at"])),
            updated_at=datetime.fromisoformat(str(row["updated_at"])),
        )


@dataclass(frozen=True)
class AuthClaim:
    """Identity claim carried inside a signed token.

    Attributes:
        user_id: Subject of the token.
        issued_at: When the token was signed.
        expires_at: When the token stops being accepted.
    """

    user_id: UUID
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class Identity:
    """Authenticated caller attached to a single request."""

    user_id: UUID
