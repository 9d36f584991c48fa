"""Shared test configuration.

Settings are read from the environment on first use, so the required
variables are set here before any test module imports the application.
"""

import os
import tempfile
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from uuid import UUID, uuid4

import pytest

TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

os.environ.setdefault("JWT_SECRET_KEY", TEST_JWT_SECRET)
os.environ.setdefault(
    "DATABASE_PATH", str(Path(tempfile.mkdtemp(prefix="accounts-test-")) / "test.db")
)

from src.modules.auth.exceptions import AccountAlreadyExistsError  # noqa: E402
from src.modules.auth.models import User  # noqa: E402


class InMemoryUserStore:
    """Dict-backed CredentialStore used by HTTP-level tests."""

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}

    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self.users.values() if u.email == email), None)

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self.users.get(user_id)

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
        if await self.get_by_email(email) is not None:
            raise AccountAlreadyExistsError(email)
        now = datetime.now(UTC)
        user = User(
            id=uuid4(),
            email=email,
            hashed_password=hashed_password,
            first_name=first_name,
            last_name=last_name,
            profile_picture=profile_picture,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        return user

    async def update(self, user_id: UUID, **fields: object) -> User | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        email = fields.get("email")
        if email is not None:
            owner = await self.get_by_email(str(email))
            if owner is not None and owner.id != user_id:
                raise AccountAlreadyExistsError(str(email))
        updated = replace(user, **fields, updated_at=datetime.now(UTC))  # type: ignore[arg-type]
        self.users[user_id] = updated
        return updated

    async def list_all(self) -> list[User]:
        return sorted(self.users.values(), key=lambda u: u.created_at)


@pytest.fixture
def memory_store() -> InMemoryUserStore:
    """Create an empty in-memory credential store."""
    return InMemoryUserStore()
