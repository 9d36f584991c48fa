"""Tests for profile management service."""

import tempfile
from pathlib import Path
from uuid import uuid4

import pytest

from src.infrastructure.database import Database
from src.modules.auth.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InvalidEmailError,
)
from src.modules.auth.models import User
from src.modules.auth.repository import UserRepository
from src.modules.users.service import UserService


@pytest.fixture
async def repository() -> UserRepository:
    """Create a user repository backed by a temporary database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db = Database(Path(tmpdir) / "test.db")
        await db.connect()
        yield UserRepository(db)
        await db.disconnect()


@pytest.fixture
def user_service(repository: UserRepository) -> UserService:
    return UserService(repository)


async def _create(repository: UserRepository, email: str) -> User:
    return await repository.create(
        email=email,
        hashed_password="$2b$10$placeholder",
        first_name="Ann",
        description="Add a description ..",
    )


class TestUserService:
    """Tests for UserService."""

    async def test_list_users(
        self, user_service: UserService, repository: UserRepository
    ) -> None:
        await _create(repository, "a@example.com")
        await _create(repository, "b@example.com")

        users = await user_service.list_users()

        assert {u.email for u in users} == {"a@example.com", "b@example.com"}

    async def test_get_user(
        self, user_service: UserService, repository: UserRepository
    ) -> None:
        created = await _create(repository, "a@example.com")

        user = await user_service.get_user(created.id)

        assert user.email == "a@example.com"

    async def test_get_unknown_user(self, user_service: UserService) -> None:
        with pytest.raises(AccountNotFoundError):
            await user_service.get_user(uuid4())

    async def test_update_description(
        self, user_service: UserService, repository: UserRepository
    ) -> None:
        created = await _create(repository, "a@example.com")

        user = await user_service.update_description(created.id, "Climber")

        assert user.description == "Climber"
        assert user.hashed_password == created.hashed_password

    async def test_update_description_unknown_user(
        self, user_service: UserService
    ) -> None:
        with pytest.raises(AccountNotFoundError):
            await user_service.update_description(uuid4(), "x")

    async def test_update_email(
        self, user_service: UserService, repository: UserRepository
    ) -> None:
        created = await _create(repository, "a@example.com")

        user = await user_service.update_email(created.id, "new@example.com")

        assert user.email == "new@example.com"
        assert await repository.get_by_email("a@example.com") is None

    @pytest.mark.parametrize("email", ["", "plain", "a@b", "two@@example.com", "sp ace@x.com"])
    async def test_update_email_rejects_malformed(
        self, user_service: UserService, repository: UserRepository, email: str
    ) -> None:
        created = await _create(repository, "a@example.com")

        with pytest.raises(InvalidEmailError):
            await user_service.update_email(created.id, email)

    async def test_update_email_taken(
        self, user_service: UserService, repository: UserRepository
    ) -> None:
        await _create(repository, "a@example.com")
        second = await _create(repository, "b@example.com")

        with pytest.raises(AccountAlreadyExistsError):
            await user_service.update_email(second.id, "a@example.com")

    async def test_update_email_stores_normalized_domain(
        self, user_service: UserService, repository: UserRepository
    ) -> None:
        """The stored form matches what login lookups search for."""
        created = await _create(repository, "a@example.com")

        user = await user_service.update_email(created.id, "Ann@EXAMPLE.com")

        assert user.email == "Ann@example.com"
        assert await repository.get_by_email("Ann@example.com") is not None

    async def test_update_email_taken_with_different_domain_case(
        self, user_service: UserService, repository: UserRepository
    ) -> None:
        await _create(repository, "b@x.com")
        second = await _create(repository, "c@example.com")

        with pytest.raises(AccountAlreadyExistsError):
            await user_service.update_email(second.id, "b@X.COM")
