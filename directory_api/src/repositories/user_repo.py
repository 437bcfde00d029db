"""
User repository for database operations.

Provides async access to the users table using an asyncpg connection pool.
Every operation is a single statement; driver failures are logged and
re-raised as StoreError.
"""

import asyncio
from typing import List

import asyncpg

from directory_api.src.errors import StoreError
from directory_api.src.models.user import User
from shared.logging import get_logger

logger = get_logger(__name__)

# Failures that mean the store rejected the statement or could not be reached.
STORE_EXCEPTIONS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, pool: asyncpg.Pool):
        """
        Initialize user repository.

        Args:
            pool: asyncpg connection pool, shared by all requests
        """
        self.pool = pool

    async def ping(self) -> None:
        """
        Check that a connection can be acquired and a query executed.

        Raises:
            StoreError: If the store is unreachable
        """
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except STORE_EXCEPTIONS as e:
            logger.error("store_ping_failed", error=str(e))
            raise StoreError("Store is unreachable") from e

    async def list_users(self) -> List[User]:
        """
        List every user.

        No ordering is requested, so the order of the result is whatever the
        store returns and may differ between calls.

        Returns:
            All users currently stored (empty list if none)

        Raises:
            StoreError: On connection failure or query rejection
        """
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch("SELECT id, name FROM users")
        except STORE_EXCEPTIONS as e:
            logger.error("users_list_failed", error=str(e), error_type=type(e).__name__)
            raise StoreError("Failed to list users") from e

        users = [User(id=row["id"], name=row["name"]) for row in rows]
        logger.debug("users_listed", count=len(users))
        return users

    async def create_user(self, name: str) -> User:
        """
        Insert a new user.

        Not idempotent: the same name inserted twice yields two rows.

        Args:
            name: Display name

        Returns:
            Created user with its store-assigned id

        Raises:
            StoreError: On constraint violation, connection failure, or a
                value the store refuses
        """
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    """
                    INSERT INTO users (name)
                    VALUES ($1)
                    RETURNING id, name
                    """,
                    name
                )
        except STORE_EXCEPTIONS as e:
            logger.error("user_create_failed", error=str(e), error_type=type(e).__name__)
            raise StoreError("Failed to create user") from e

        user = User(id=row["id"], name=row["name"])
        logger.info("user_created", user_id=user.id)
        return user
