"""Authentication service for registration and login."""

import asyncio

import structlog

from src.infrastructure.observability import traced
from src.modules.auth.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AuthenticationError,
)
from src.modules.auth.models import Identity, User
from src.modules.auth.password import PasswordHasher
from src.modules.auth.protocol import CredentialStore
from src.modules.auth.schemas import TokenResponse
from src.modules.auth.tokens import TokenIssuer

logger = structlog.get_logger()

DEFAULT_DESCRIPTION = "Add a description .."


class AuthService:
    """Service for authentication operations.

    Handles account registration and login, minting a bearer token on
    success. Each call is a single pass with no retries: store failures
    propagate to the caller unchanged.

    Note:
        Login reports an unknown email and a wrong password differently
        (AccountNotFoundError vs AuthenticationError). This makes account
        enumeration possible and is kept for compatibility with existing
        clients.
    """

    def __init__(
        self,
        repository: CredentialStore,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
        *,
        default_description: str = DEFAULT_DESCRIPTION,
    ) -> None:
        """Initialize the auth service.

        Args:
            repository: Credential store for user records.
            hasher: Password hasher.
            issuer: Token issuer used to sign bearer tokens.
            default_description: Profile description used when none is given.
        """
        self._repo = repository
        self._hasher = hasher
        self._issuer = issuer
        self._default_description = default_description

    @traced(span_name="auth.login")
    async def login(self, email: str, password: str) -> TokenResponse:
        """Authenticate a user and issue a token.

        The existence check always runs before the password check.

        Args:
            email: User's email address.
            password: Plain text password.

        Returns:
            TokenResponse with the signed token.

        Raises:
            AccountNotFoundError: If no account has this email.
            AuthenticationError: If the password does not match.
        """
        user = await self._repo.get_by_email(email)

        if user is None:
            logger.warning("auth_failed_user_not_found", email=email)
            raise AccountNotFoundError(email)

        # bcrypt is CPU-bound; keep it off the event loop
        valid = await asyncio.to_thread(
            self._hasher.verify, password, user.hashed_password
        )
        if not valid:
            logger.warning("auth_failed_invalid_password", email=email)
            raise AuthenticationError("Invalid password")

        logger.info("user_authenticated", user_id=str(user.id), email=email)
        return self.create_token(user)

    @traced(span_name="auth.register")
    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        *,
        last_name: str | None = None,
        description: str | None = None,
    ) -> TokenResponse:
        """Register a new account and issue a token.

        Args:
            email: User's email address.
            password: Plain text password.
            first_name: User's first name.
            last_name: Optional last name, stored as an empty string if absent.
            description: Optional profile description, replaced by the
                default placeholder if absent.

        Returns:
            TokenResponse with the signed token.

        Raises:
            AccountAlreadyExistsError: If the email is already registered,
                including when a concurrent registration wins the race.
        """
        existing = await self._repo.get_by_email(email)
        if existing is not None:
            logger.warning("register_failed_email_taken", email=email)
            raise AccountAlreadyExistsError(email)

        hashed = await asyncio.to_thread(self._hasher.hash, password)

        user = await self._repo.create(
            email=email,
            hashed_password=hashed,
            first_name=first_name,
            last_name=last_name or "",
            description=description or self._default_description,
        )

        logger.info("user_registered", user_id=str(user.id), email=user.email)
        return self.create_token(user)

    def create_token(self, user: User) -> TokenResponse:
        """Create a bearer token for a user.

        Args:
            user: The user to create a token for.

        Returns:
            TokenResponse with token and lifetime.
        """
        token = self._issuer.issue(user.id)

        return TokenResponse(
            access_token=token,
            token_type="bearer",  # nosec B106 - OAuth2 token type, not a password
            expires_in=int(self._issuer.lifetime.total_seconds()),
        )

    async def get_current_user(self, identity: Identity) -> User:
        """Load the account behind an authenticated identity.

        Args:
            identity: Identity produced by the auth gate.

        Returns:
            The caller's User.

        Raises:
            AccountNotFoundError: If the account no longer exists.
        """
        user = await self._repo.get_by_id(identity.user_id)
        if user is None:
            raise AccountNotFoundError(str(identity.user_id))
        return user
