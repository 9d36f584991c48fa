"""Authentication module: password hashing, bearer tokens, login and registration."""

from src.modules.auth.exceptions import (
    AccountAlreadyExistsError,
    AccountError,
    AccountNotFoundError,
    AuthenticationError,
    InvalidEmailError,
)
from src.modules.auth.gate import AuthGate, extract_bearer_token
from src.modules.auth.models import AuthClaim, Identity, User
from src.modules.auth.password import PasswordHasher
from src.modules.auth.protocol import CredentialStore
from src.modules.auth.repository import UserRepository
from src.modules.auth.schemas import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserProfile,
)
from src.modules.auth.service import AuthService
from src.modules.auth.tokens import RejectionReason, TokenIssuer, TokenRejection

__all__ = [
    "AccountAlreadyExistsError",
    "AccountError",
    "AccountNotFoundError",
    "AuthClaim",
    "AuthGate",
    "AuthService",
    "AuthenticationError",
    "CredentialStore",
    "Identity",
    "InvalidEmailError",
    "LoginRequest",
    "PasswordHasher",
    "RejectionReason",
    "TokenIssuer",
    "TokenRejection",
    "TokenResponse",
    "User",
    "UserCreate",
    "UserProfile",
    "UserRepository",
    "extract_bearer_token",
]
