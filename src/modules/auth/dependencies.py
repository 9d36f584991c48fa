"""FastAPI dependencies wiring the auth service and gate into routes."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from src.modules.auth.gate import AuthGate, extract_bearer_token
from src.modules.auth.models import Identity
from src.modules.auth.service import AuthService
from src.modules.auth.tokens import TokenRejection

# Configured during app startup
_auth_service: AuthService | None = None
_auth_gate: AuthGate | None = None


def get_auth_service() -> AuthService:
    """Get the auth service instance.

    Raises:
        HTTPException: 503 if the service has not been configured.
    """
    if _auth_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service not configured",
        )
    return _auth_service


def set_auth_service(service: AuthService | None) -> None:
    """Set the auth service instance during app startup."""
    global _auth_service
    _auth_service = service


def get_auth_gate() -> AuthGate:
    """Get the auth gate instance.

    Raises:
        HTTPException: 503 if the gate has not been configured.
    """
    if _auth_gate is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication gate not configured",
        )
    return _auth_gate


def set_auth_gate(gate: AuthGate | None) -> None:
    """Set the auth gate instance during app startup."""
    global _auth_gate
    _auth_gate = gate


def require_identity(
    request: Request,
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Dependency that admits only requests with a valid bearer token.

    On success the identity is also stored on ``request.state.identity``.
    The rejection reason is logged by the gate and never returned to the
    client.

    Raises:
        HTTPException: 401 if the token is missing, malformed, expired or
            carries a bad signature.
    """
    result = gate.authenticate(extract_bearer_token(authorization))

    if isinstance(result, TokenRejection):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.identity = result
    return result


CurrentIdentity = Annotated[Identity, Depends(require_identity)]
