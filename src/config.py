"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Minimum bcrypt cost accepted by the service
MIN_BCRYPT_ROUNDS = 10

# HMAC keys shorter than the SHA-256 digest weaken HS256
MIN_JWT_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Account Service"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_path: str = "./data/accounts.db"

    # Authentication
    jwt_secret_key: SecretStr  # Required, validated at startup
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = Field(default=30, gt=0)  # Token lifetime in days
    bcrypt_rounds: int = Field(default=MIN_BCRYPT_ROUNDS, ge=MIN_BCRYPT_ROUNDS, le=31)

    # Registration
    password_min_length: int = Field(default=5, ge=1)  # Variants disagree: 5 vs 8
    default_description: str = "Add a description .."

    # Tracing
    otel_enabled: bool = False
    otel_endpoint: str | None = None  # e.g. http://localhost:4318
    otel_console_export: bool = False
    otel_sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)

    @field_validator("jwt_secret_key")
    @classmethod
    def _check_secret_length(cls, value: SecretStr) -> SecretStr:
        if len(value.get_secret_value()) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"jwt_secret_key must be at least {MIN_JWT_SECRET_LENGTH} characters"
            )
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
