"""Exception handlers shared by all API routes."""

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from src.infrastructure.database import PersistenceError

logger = structlog.get_logger()


async def persistence_error_handler(
    request: Request, exc: PersistenceError
) -> JSONResponse:
    """Turn a store failure into a generic 500.

    The underlying error is logged; the client only learns that the request
    failed.
    """
    logger.error(
        "persistence_error",
        path=request.url.path,
        operation=exc.operation,
        error=exc.reason,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
