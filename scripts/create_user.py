#!/usr/bin/env python3
"""CLI script to register accounts from the command line.

Usage:
    python scripts/create_user.py ann@example.com secret1 Ann
    python scripts/create_user.py ann@example.com secret1 Ann --last-name Lee
"""

import argparse
import asyncio
import sys
from datetime import timedelta
from pathlib import Path

# Add project root to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from src.config import Settings
from src.infrastructure.database import PersistenceError, init_database
from src.modules.auth.exceptions import AccountAlreadyExistsError, InvalidEmailError
from src.modules.auth.password import PasswordHasher
from src.modules.auth.repository import UserRepository
from src.modules.auth.schemas import MAX_PASSWORD_BYTES, normalize_email
from src.modules.auth.service import AuthService
from src.modules.auth.tokens import TokenIssuer


async def create_user(
    settings: Settings,
    email: str,
    password: str,
    first_name: str,
    last_name: str | None = None,
    description: str | None = None,
) -> None:
    """Register an account and print its bearer token.

    Args:
        settings: Application settings.
        email: User's email address, stored in normalized form.
        password: User's password (will be hashed).
        first_name: User's first name.
        last_name: Optional last name.
        description: Optional profile description.
    """
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        print(
            f"✗ Error: Password must be at most {MAX_PASSWORD_BYTES} bytes",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        email = normalize_email(email)
    except InvalidEmailError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    db = await init_database(settings.database_path)

    try:
        repo = UserRepository(db)
        auth_service = AuthService(
            repo,
            PasswordHasher(settings.bcrypt_rounds),
            TokenIssuer(
                settings.jwt_secret_key.get_secret_value(),
                algorithm=settings.jwt_algorithm,
                lifetime=timedelta(days=settings.jwt_expire_days),
            ),
            default_description=settings.default_description,
        )

        token = await auth_service.register(
            email,
            password,
            first_name,
            last_name=last_name,
            description=description,
        )

        user = await repo.get_by_email(email)
        print(f"✓ Created account: {email}")
        if user is not None:
            print(f"  User ID: {user.id}")
        print(f"  Token: {token.access_token}")

    except AccountAlreadyExistsError as e:
        print(f"✗ Error: {e}: {email}", file=sys.stderr)
        sys.exit(1)
    except PersistenceError as e:
        print(f"✗ Database error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        await db.disconnect()


def main() -> None:
    """Parse arguments and create the account."""
    parser = argparse.ArgumentParser(
        description="Register an account",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/create_user.py ann@example.com secret1 Ann
  python scripts/create_user.py bob@example.com hunter22 Bob --last-name Smith
        """,
    )

    parser.add_argument("email", help="User's email address")
    parser.add_argument("password", help="User's password")
    parser.add_argument("first_name", help="User's first name")
    parser.add_argument("--last-name", default=None, help="User's last name")
    parser.add_argument("--description", default=None, help="Profile description")

    args = parser.parse_args()

    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        print("✗ Error: invalid configuration", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        print("  Set JWT_SECRET_KEY (32+ characters) in your .env file", file=sys.stderr)
        sys.exit(1)

    if len(args.password) < settings.password_min_length:
        print(
            f"✗ Error: Password must be at least {settings.password_min_length} characters",
            file=sys.stderr,
        )
        sys.exit(1)

    asyncio.run(
        create_user(
            settings,
            args.email,
            args.password,
            args.first_name,
            args.last_name,
            args.description,
        )
    )


if __name__ == "__main__":
    main()
