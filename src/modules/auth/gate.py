"""Bearer token gate for protected operations."""

import structlog

from src.infrastructure.observability import record_auth_outcome
from src.modules.auth.models import Identity
from src.modules.auth.tokens import RejectionReason, TokenIssuer, TokenRejection

logger = structlog.get_logger()

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Pull the token out of an ``Authorization: Bearer <token>`` header value.

    Args:
        authorization: Raw header value, or None if the header is absent.

    Returns:
        The token, or None if the header is missing or uses another scheme.
    """
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None

    token = token.strip()
    return token or None


class AuthGate:
    """Stateless filter that turns a bearer token into a request identity.

    Every call is decided from the token alone; nothing is remembered
    between requests.
    """

    def __init__(self, issuer: TokenIssuer) -> None:
        """Initialize the gate.

        Args:
            issuer: Token issuer used to validate incoming tokens.
        """
        self._issuer = issuer

    def authenticate(self, token: str | None) -> Identity | TokenRejection:
        """Validate a bearer token.

        Args:
            token: Raw token string, or None if the request carried none.

        Returns:
            The caller's Identity, or the TokenRejection explaining why the
            request must not continue.
        """
        if not token:
            logger.info("gate_rejected", reason=RejectionReason.MALFORMED.value)
            record_auth_outcome("rejected", reason=RejectionReason.MALFORMED.value)
            return TokenRejection(
                reason=RejectionReason.MALFORMED, detail="Missing bearer token"
            )

        result = self._issuer.validate(token)
        if isinstance(result, TokenRejection):
            logger.info("gate_rejected", reason=result.reason.value)
            record_auth_outcome("rejected", reason=result.reason.value)
            return result

        record_auth_outcome("accepted")
        return Identity(user_id=result.user_id)
