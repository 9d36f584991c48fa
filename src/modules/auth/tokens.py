"""Signed bearer token issuance and validation."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import UUID

import jwt
import structlog

from src.modules.auth.models import AuthClaim

logger = structlog.get_logger()

# Token lifetime when none is configured
DEFAULT_TOKEN_LIFETIME = timedelta(days=30)

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class RejectionReason(str, Enum):
    """Why a token failed validation."""

    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class TokenRejection:
    """Result of a failed token validation.

    Attributes:
        reason: Category of the failure.
        detail: Diagnostic message for logs, never sent to clients.
    """

    reason: RejectionReason
    detail: str = ""


class TokenIssuer:
    """Issues and validates HMAC-signed JWTs carrying a user id.

    Tokens are stateless: validity depends only on the signature and the
    expiry claim. There is no revocation list.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
    ) -> None:
        """Initialize the issuer.

        Args:
            secret: Signing key, loaded once at startup.
            algorithm: JWT signing algorithm.
            lifetime: How long an issued token stays valid.

        Raises:
            ValueError: If the secret is empty or the lifetime is not positive.
        """
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if lifetime <= timedelta(0):
            raise ValueError("Token lifetime must be positive")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, user_id: UUID, *, now: datetime | None = None) -> str:
        """Sign a token for a user.

        Args:
            user_id: Subject of the token.
            now: Issue time override; defaults to the current UTC time.

        Returns:
            Encoded JWT string.
        """
        issued_at = now or datetime.now(UTC)
        expires_at = issued_at + self._lifetime

        # JWT requires integer timestamps for exp and iat
        payload = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }

        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: str) -> AuthClaim | TokenRejection:
        """Verify a token's signature and expiry.

        Args:
            token: Encoded JWT string.

        Returns:
            The decoded claim, or a TokenRejection describing the failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            return self._reject(RejectionReason.EXPIRED, e)
        except jwt.InvalidSignatureError as e:
            return self._reject(RejectionReason.BAD_SIGNATURE, e)
        except jwt.InvalidTokenError as e:
            return self._reject(RejectionReason.MALFORMED, e)

        try:
            user_id = UUID(str(payload["sub"]))
        except ValueError as e:
            return self._reject(RejectionReason.MALFORMED, e)

        return AuthClaim(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )

    @staticmethod
    def _reject(reason: RejectionReason, error: Exception) -> TokenRejection:
        logger.warning("token_rejected", reason=reason.value, error=str(error))
        return TokenRejection(reason=reason, detail=str(error))
