"""Integration test fixtures for database, services and HTTP client.

Each test gets its own in-memory SQLite database. StaticPool keeps a single
connection so every session in the test sees the same database.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from src.taskboard.api.dependencies import get_db_session
from src.taskboard.core.db import create_schema, dispose_engine
from src.taskboard.main import create_app
from src.taskboard.models import User
from tests.helpers import Services, build_services, create_user


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_schema(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    Services commit their own work; test setup helpers commit explicitly.
    """
    async with AsyncSession(engine, expire_on_commit=False, autoflush=False) as session:
        yield session


@pytest.fixture
def services(db_session: AsyncSession) -> Services:
    return build_services(db_session)


@pytest.fixture
async def organizer(db_session: AsyncSession) -> User:
    return await create_user(db_session, user_name="olivia", full_name="Olivia Organizer")


@pytest.fixture
async def member(db_session: AsyncSession) -> User:
    return await create_user(db_session, user_name="mason", full_name="Mason Member")


@pytest.fixture
async def other_member(db_session: AsyncSession) -> User:
    return await create_user(db_session, user_name="maya", full_name="Maya Member")


@pytest.fixture
async def outsider(db_session: AsyncSession) -> User:
    return await create_user(db_session, user_name="oscar", full_name="Oscar Outsider")


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the app, bound to the test database."""
    app = create_app()

    async def _test_session() -> AsyncGenerator[AsyncSession]:
        async with AsyncSession(engine, expire_on_commit=False, autoflush=False) as session:
            yield session

    app.dependency_overrides[get_db_session] = _test_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    # /health goes through the global engine
    await dispose_engine()
