"""Pydantic schemas for authentication API."""

from typing import Annotated
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from src.modules.auth.exceptions import InvalidEmailError

# bcrypt rejects anything past 72 bytes
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


Password = Annotated[str, Field(min_length=1), AfterValidator(_check_password_bytes)]


def normalize_email(email: str) -> str:
    """Validate an address and return the form `EmailStr` would store.

    Raises:
        InvalidEmailError: If the address is not well formed.
    """
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise InvalidEmailError(email) from e


class UserCreate(BaseModel):
    """Schema for registering a new account.

    The minimum password length is configurable and checked by the route,
    not here.
    """

    email: EmailStr
    password: Password
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=1000)


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: Password


class TokenResponse(BaseModel):
    """Schema for a freshly issued bearer token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until expiration


class UserProfile(BaseModel):
    """Public view of an account (excludes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str
    last_name: str
    profile_picture: str | None
    description: str
