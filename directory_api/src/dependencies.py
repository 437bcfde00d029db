"""
FastAPI dependency injection for the database pool and repositories.

The pool is created once per process during application startup, stored on
``app.state`` and shared by every request. asyncpg synchronizes access to it
internally, so handlers never lock.
"""

import asyncio

import asyncpg
from fastapi import Request

from directory_api.src.config import Settings
from directory_api.src.errors import StartupError
from directory_api.src.repositories.user_repo import UserRepository
from shared.logging import get_logger

logger = get_logger(__name__)


# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================


async def init_db_pool(settings: Settings) -> asyncpg.Pool:
    """
    Create the database connection pool.

    Should be called during application startup.

    Args:
        settings: Application settings

    Returns:
        asyncpg connection pool

    Raises:
        StartupError: If the initial connections cannot be established
    """
    max_size = max(settings.database_pool_max_size, settings.database_pool_min_size)

    try:
        pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=settings.database_pool_min_size,
            max_size=max_size,
            command_timeout=settings.database_command_timeout,
        )
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as e:
        logger.error(
            "database_pool_init_failed",
            error=str(e),
            database=settings.database_host
        )
        raise StartupError("Unable to connect to the database") from e

    logger.info(
        "database_pool_initialized",
        min_size=settings.database_pool_min_size,
        max_size=max_size,
        database=settings.database_host
    )
    return pool


async def close_db_pool(pool: asyncpg.Pool) -> None:
    """
    Close database connection pool.

    Should be called during application shutdown.
    """
    await pool.close()
    logger.info("database_pool_closed")


def get_db_pool(request: Request) -> asyncpg.Pool:
    """
    Get the process-wide database connection pool.

    Raises:
        RuntimeError: If the pool has not been initialized
    """
    pool = getattr(request.app.state, "db_pool", None)
    if pool is None:
        logger.error("database_pool_not_initialized")
        raise RuntimeError(
            "Database pool not initialized. The application lifespan must run first."
        )
    return pool


# ============================================================================
# REPOSITORY DEPENDENCIES
# ============================================================================


def get_user_repository(request: Request) -> UserRepository:
    """
    Get user repository instance.

    Example:
        @router.get("/users")
        async def list_users(repo: UserRepository = Depends(get_user_repository)):
            return await repo.list_users()
    """
    return UserRepository(get_db_pool(request))
