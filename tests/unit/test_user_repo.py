"""
Unit tests for the user repository.

Tests cover:
- Listing users from an empty and populated store
- Creating users with store-assigned ids
- Non-idempotent creation
- Wrapping driver failures in StoreError
- Connection release after every statement
"""

import asyncio

import asyncpg
import pytest
from asyncpg.exceptions._base import DataError as DriverDataError

from directory_api.src.errors import StoreError
from directory_api.src.models.user import User
from directory_api.src.repositories.user_repo import UserRepository


class TestListUsers:
    """Tests for UserRepository.list_users."""

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, fake_pool):
        """Test listing an empty table returns [] rather than failing."""
        repo = UserRepository(fake_pool)

        assert await repo.list_users() == []

    @pytest.mark.asyncio
    async def test_returns_every_row_as_user(self, fake_pool):
        """Test each stored row is mapped to a User."""
        fake_pool.rows = [{"id": 1, "name": "Ada"}, {"id": 2, "name": "Grace"}]
        repo = UserRepository(fake_pool)

        users = await repo.list_users()

        assert users == [User(id=1, name="Ada"), User(id=2, name="Grace")]

    @pytest.mark.asyncio
    async def test_query_has_no_ordering(self, fake_pool):
        """Test the list query reads the whole table without ORDER BY."""
        repo = UserRepository(fake_pool)

        await repo.list_users()

        assert fake_pool.queries == ["SELECT id, name FROM users"]

    @pytest.mark.asyncio
    async def test_unreachable_store_raises_store_error(self, fake_pool):
        """Test connection failures surface as StoreError."""
        fake_pool.acquire_error = ConnectionRefusedError("connection refused")
        repo = UserRepository(fake_pool)

        with pytest.raises(StoreError) as exc_info:
            await repo.list_users()

        assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)

    @pytest.mark.asyncio
    async def test_rejected_query_raises_store_error(self, fake_pool):
        """Test a query the store rejects surfaces as StoreError."""
        fake_pool.query_error = asyncpg.UndefinedTableError('relation "users" does not exist')
        repo = UserRepository(fake_pool)

        with pytest.raises(StoreError):
            await repo.list_users()

        assert fake_pool.acquired == fake_pool.released


class TestCreateUser:
    """Tests for UserRepository.create_user."""

    @pytest.mark.asyncio
    async def test_returns_store_assigned_id(self, fake_pool):
        """Test the created user carries the id the store assigned."""
        repo = UserRepository(fake_pool)

        user = await repo.create_user("Ada")

        assert user == User(id=1, name="Ada")
        assert fake_pool.rows == [{"id": 1, "name": "Ada"}]

    @pytest.mark.asyncio
    async def test_insert_returns_id_and_name(self, fake_pool):
        """Test a single INSERT ... RETURNING statement is issued."""
        repo = UserRepository(fake_pool)

        await repo.create_user("Ada")

        assert len(fake_pool.queries) == 1
        query = " ".join(fake_pool.queries[0].split())
        assert query == "INSERT INTO users (name) VALUES ($1) RETURNING id, name"

    @pytest.mark.asyncio
    async def test_same_name_twice_creates_two_users(self, fake_pool):
        """Test creation is not idempotent."""
        repo = UserRepository(fake_pool)

        first = await repo.create_user("Ada")
        second = await repo.create_user("Ada")

        assert first.id != second.id
        assert first.name == second.name == "Ada"
        assert len(await repo.list_users()) == 2

    @pytest.mark.asyncio
    async def test_created_user_is_listed(self, fake_pool):
        """Test a created user appears in the next listing with a positive id."""
        repo = UserRepository(fake_pool)

        created = await repo.create_user("Grace")
        users = await repo.list_users()

        assert created in users
        assert all(user.id > 0 for user in users)

    @pytest.mark.asyncio
    async def test_constraint_violation_raises_store_error(self, fake_pool):
        """Test constraint violations surface as StoreError."""
        fake_pool.query_error = asyncpg.UniqueViolationError("duplicate key value")
        repo = UserRepository(fake_pool)

        with pytest.raises(StoreError) as exc_info:
            await repo.create_user("Ada")

        assert isinstance(exc_info.value.__cause__, asyncpg.UniqueViolationError)
        assert fake_pool.rows == []

    @pytest.mark.asyncio
    async def test_argument_driver_cannot_encode_raises_store_error(self, fake_pool):
        """Test a value asyncpg refuses to encode surfaces as StoreError."""
        fake_pool.query_error = DriverDataError(
            "invalid input for query argument $1: 'a\\ud800'"
        )
        repo = UserRepository(fake_pool)

        with pytest.raises(StoreError) as exc_info:
            await repo.create_user("a\ud800")

        assert isinstance(exc_info.value.__cause__, DriverDataError)
        assert fake_pool.rows == []

    @pytest.mark.asyncio
    async def test_statement_timeout_raises_store_error(self, fake_pool):
        """Test a timed-out statement surfaces as StoreError."""
        fake_pool.query_error = asyncio.TimeoutError()
        repo = UserRepository(fake_pool)

        with pytest.raises(StoreError):
            await repo.create_user("Ada")

    @pytest.mark.asyncio
    async def test_closed_connection_raises_store_error(self, fake_pool):
        """Test driver interface errors surface as StoreError."""
        fake_pool.query_error = asyncpg.InterfaceError("connection is closed")
        repo = UserRepository(fake_pool)

        with pytest.raises(StoreError):
            await repo.create_user("Ada")


class TestPing:
    """Tests for UserRepository.ping."""

    @pytest.mark.asyncio
    async def test_ping_succeeds_on_reachable_store(self, fake_pool):
        """Test ping issues a trivial query."""
        repo = UserRepository(fake_pool)

        await repo.ping()

        assert fake_pool.queries == ["SELECT 1"]

    @pytest.mark.asyncio
    async def test_ping_raises_store_error_when_unreachable(self, fake_pool):
        """Test ping failure surfaces as StoreError."""
        fake_pool.acquire_error = OSError("network unreachable")
        repo = UserRepository(fake_pool)

        with pytest.raises(StoreError):
            await repo.ping()
