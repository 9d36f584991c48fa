"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path

import structlog
from fastapi import FastAPI

from src.api.errors import persistence_error_handler
from src.api.health import router as health_router
from src.config import Settings, get_settings
from src.infrastructure.database import Database, PersistenceError, init_database
from src.infrastructure.observability import init_observability, shutdown_observability
from src.modules.auth.dependencies import set_auth_gate, set_auth_service
from src.modules.auth.gate import AuthGate
from src.modules.auth.password import PasswordHasher
from src.modules.auth.repository import UserRepository
from src.modules.auth.routes import router as auth_router
from src.modules.auth.service import AuthService
from src.modules.auth.tokens import TokenIssuer
from src.modules.users.routes import router as users_router
from src.modules.users.routes import set_user_service
from src.modules.users.service import UserService

logger = structlog.get_logger()
settings = get_settings()

# Database instance (initialized on startup)
_database: Database | None = None


def wire_services(database: Database, settings: Settings) -> None:
    """Build the account services and hand them to the routers.

    Args:
        database: Connected database.
        settings: Application settings.
    """
    repository = UserRepository(database)
    issuer = TokenIssuer(
        settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(days=settings.jwt_expire_days),
    )
    auth_service = AuthService(
        repository,
        PasswordHasher(settings.bcrypt_rounds),
        issuer,
        default_description=settings.default_description,
    )

    set_auth_service(auth_service)
    set_auth_gate(AuthGate(issuer))
    set_user_service(UserService(repository))
    logger.info(
        "auth_service_initialized",
        token_lifetime_days=settings.jwt_expire_days,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan handler for startup/shutdown."""
    global _database

    db_path = Path(settings.database_path)
    _database = await init_database(db_path)

    wire_services(_database, settings)

    yield

    # Cleanup on shutdown
    set_auth_service(None)
    set_auth_gate(None)
    set_user_service(None)
    if _database:
        await _database.disconnect()
    shutdown_observability()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

init_observability(settings, app=app)

# Store failures become a generic 500
app.add_exception_handler(
    PersistenceError,
    persistence_error_handler,  # type: ignore[arg-type]
)

# Register routers
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(auth_router)
app.include_router(users_router)


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run("src.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
