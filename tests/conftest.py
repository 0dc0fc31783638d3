"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from core.config import Settings
from models import Base
from tests.helpers import TEST_JWT_AUDIENCE, TEST_JWT_SECRET, auth_headers, make_token


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def database_url(postgres_container: PostgresContainer) -> str:
    """
    Get the database URL from the container and set it in environment.

    This must be set before any app imports that trigger Settings validation.
    """
    url = postgres_container.get_connection_url()
    os.environ["DATABASE_URL"] = url
    # Tests authenticate with real tokens, never through the dev bypass
    os.environ["DEV_MODE"] = "false"
    return url


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine for testing."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_connection(async_engine: AsyncEngine) -> AsyncGenerator[AsyncConnection]:
    """
    Create a connection with a transaction that will be rolled back after the test.

    Each test runs in its own transaction that is rolled back, so tests don't
    affect each other.
    """
    async with async_engine.connect() as connection:
        transaction = await connection.begin()
        try:
            yield connection
        finally:
            await transaction.rollback()


@pytest.fixture
async def db_session(db_connection: AsyncConnection) -> AsyncGenerator[AsyncSession]:
    """
    Create an async session bound to the test transaction.

    Uses savepoints so the session's flush/commit work inside the outer test
    transaction.
    """
    session_factory = async_sessionmaker(
        bind=db_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def test_settings(database_url: str) -> Settings:
    """Settings that verify tokens locally against the test JWT secret."""
    return Settings(
        _env_file=None,
        database_url=database_url,
        dev_mode=False,
        supabase_jwt_secret=TEST_JWT_SECRET,
        supabase_jwt_audience=TEST_JWT_AUDIENCE,
    )


@pytest.fixture
async def client(
    db_session: AsyncSession,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """Create an unauthenticated test client with database and settings overrides."""
    # Clear the settings cache so it picks up DATABASE_URL from environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    def override_get_settings() -> Settings:
        return test_settings

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = override_get_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user_a_token() -> str:
    """Access token for User A."""
    return make_token(
        "user-a-id",
        "user-a@test.com",
        full_name="User A",
        avatar_url="https://avatars.example.com/a.png",
    )


@pytest.fixture
def user_b_token() -> str:
    """Access token for User B."""
    return make_token("user-b-id", "user-b@test.com", full_name="User B")


@pytest.fixture
def user_a_headers(user_a_token: str) -> dict[str, str]:
    """Authorization headers for User A."""
    return auth_headers(user_a_token)


@pytest.fixture
def user_b_headers(user_b_token: str) -> dict[str, str]:
    """Authorization headers for User B."""
    return auth_headers(user_b_token)
