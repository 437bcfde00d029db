"""
FastAPI application entry point for the User Directory API.

This module provides the FastAPI application with:
- Health endpoint
- User list and create endpoints backed by PostgreSQL
- Static file serving for the front-end on every other path
- Request logging with correlation IDs
- Database connection pool management
- Graceful startup and shutdown
"""

import os
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from directory_api.src.config import Settings, get_settings
from directory_api.src.dependencies import close_db_pool, init_db_pool
from directory_api.src.errors import BadRequest, DirectoryError, StartupError, StoreError
from directory_api.src.middleware import RequestLoggingMiddleware
from directory_api.src.repositories.user_repo import UserRepository
from directory_api.src.routers import health, users
from shared.logging import configure_logging, get_logger

logger = get_logger(__name__)

# The listener address is fixed.
BIND_HOST = "0.0.0.0"
BIND_PORT = 8080


# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Handles:
    - Database connection pool initialization
    - Store reachability check
    - Graceful shutdown and resource cleanup

    Raises:
        StartupError: If the store cannot be reached; the server must not
            begin serving
    """
    settings: Settings = app.state.settings

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    app.state.db_pool = await init_db_pool(settings)

    try:
        try:
            await UserRepository(app.state.db_pool).ping()
        except StoreError as e:
            logger.error("application_startup_failed", error=str(e))
            raise StartupError("Database is unreachable") from e

        logger.info("database_connected", database=settings.database_host)
        logger.info(
            "application_started",
            app_name=settings.app_name,
            version=settings.app_version
        )

        yield

    finally:
        logger.info("application_shutting_down")
        await close_db_pool(app.state.db_pool)
        app.state.db_pool = None
        logger.info("application_shutdown_complete")


# ============================================================================
# Exception Handlers
# ============================================================================

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request body validation errors as 400 Bad Request."""
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "validation_error",
        path=request.url.path,
        errors=errors
    )
    error = BadRequest(errors=errors)
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response()
    )


async def directory_exception_handler(request: Request, exc: DirectoryError):
    """Render domain errors with the status code they carry."""
    if exc.status_code >= 500:
        logger.error(
            "store_error" if isinstance(exc, StoreError) else "directory_error",
            path=request.url.path,
            error=exc.message,
            cause=str(exc.__cause__) if exc.__cause__ else None
        )
    else:
        logger.warning(
            "client_error",
            path=request.url.path,
            status_code=exc.status_code,
            error=exc.message
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response()
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    # FastAPI raises a bare 400 when the body cannot be decoded at all.
    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        error = BadRequest(errors=[{
            "type": "body_parse_error",
            "loc": ["body"],
            "msg": str(exc.detail),
        }])
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_response()
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# ============================================================================
# FastAPI Application
# ============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    API routes are registered before the static mount, so the exact
    method+path routes win and every other path falls through to the
    static-asset root.

    Args:
        settings: Application settings (loaded from the environment if omitted)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="User directory backed by PostgreSQL, plus static front-end hosting.",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_pool = None

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DirectoryError, directory_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router)
    app.include_router(users.router)

    if os.path.isdir(settings.static_dir):
        app.mount(
            "/",
            StaticFiles(directory=settings.static_dir, html=True),
            name="static"
        )
    else:
        logger.warning("static_dir_missing", static_dir=settings.static_dir)

    return app


# ============================================================================
# Application Entry Point
# ============================================================================

def main() -> None:
    """
    Load configuration, then serve the application with Uvicorn.

    Exits with status 1, before binding the listener, if configuration is
    missing or invalid.
    """
    configure_logging()

    try:
        settings = get_settings()
    except StartupError as e:
        logger.error("startup_failed", error=str(e))
        sys.exit(1)

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.app_name,
        environment=settings.environment
    )

    app = create_app(settings)

    logger.info("starting_uvicorn_server", host=BIND_HOST, port=BIND_PORT)

    uvicorn.run(
        app,
        host=BIND_HOST,
        port=BIND_PORT,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
