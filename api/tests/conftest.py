"""
Shared test fixtures for DevConnector API tests.

Provides database session management, test clients, and user fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.auth.jwt import get_token_codec
from app.config import settings
from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app

# Import models so they're registered with Base.metadata before table creation
from app.models import Post, User

# Test database URL (uses separate test database)
TEST_DATABASE_URL = settings.test_database_url

# Create test engine with NullPool to avoid connection issues
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,
    echo=False,
)
enable_sqlite_foreign_keys(test_engine)

TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create tables before each test function, drop after.
    Provides isolated database state per test.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client configured for testing.
    Overrides database dependency with test session.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True,
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def session_per_request(async_client: AsyncClient) -> AsyncClient:
    """
    Client whose requests each get their own session, like production.
    Needed when requests run concurrently.
    """

    async def override_get_db():
        async with TestSessionLocal() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    return async_client


# --- Authentication Helper Fixtures ---


@pytest.fixture
def auth_headers():
    """Factory fixture for creating token headers."""

    def _auth_headers(token: str) -> dict[str, str]:
        return {settings.auth_header_name: token}

    return _auth_headers


@pytest.fixture
def valid_profile_data() -> dict[str, str]:
    """Valid create-or-update profile payload."""
    return {
        "status": "Developer",
        "skills": "python, fastapi , sql",
        "company": "Acme",
        "website": "https://example.com",
        "location": "Berlin",
        "bio": "Builds things",
        "githubusername": "octocat",
        "twitter": "https://twitter.com/octocat",
    }


@pytest.fixture
def valid_experience_data() -> dict[str, Any]:
    return {
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Remote",
        "from": "2020-01-01",
        "to": "2022-06-30",
        "current": False,
        "description": "APIs",
    }


@pytest.fixture
def valid_education_data() -> dict[str, Any]:
    return {
        "school": "State University",
        "degree": "BSc",
        "fieldofstudy": "Computer Science",
        "from": "2012-09-01",
        "to": "2016-06-30",
        "current": False,
    }


# --- User Fixtures ---


async def _create_user(
    db_session: AsyncSession,
    name: str,
    email: str,
) -> dict[str, Any]:
    """Helper to create a user in the database and issue a token for it."""
    user = User(
        name=name,
        email=email.lower(),
        avatar=f"//www.gravatar.com/avatar/{name.lower()}",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)

    return {
        "user_id": str(user.id),
        "name": user.name,
        "email": user.email,
        "avatar": user.avatar,
        "token": get_token_codec().issue(str(user.id)),
    }


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> dict[str, Any]:
    """
    Create a standard test user.

    Returns dict with user data and a valid token.
    """
    return await _create_user(db_session, name="Test User", email="test@example.com")


@pytest_asyncio.fixture
async def second_user(db_session: AsyncSession) -> dict[str, Any]:
    """Create a second user for testing ownership scenarios."""
    return await _create_user(db_session, name="Second User", email="second@example.com")


@pytest_asyncio.fixture
async def user_with_profile(
    async_client: AsyncClient, test_user: dict, auth_headers, valid_profile_data
) -> dict[str, Any]:
    """Test user who already has a profile."""
    response = await async_client.post(
        "/api/profile",
        json=valid_profile_data,
        headers=auth_headers(test_user["token"]),
    )
    assert response.status_code == 200
    return test_user


@pytest_asyncio.fixture
async def create_post(db_session: AsyncSession):
    """Factory fixture for creating posts owned by a user."""

    async def _create_post(user: dict[str, Any], text: str = "Hello") -> str:
        post = Post(user_id=UUID(user["user_id"]), text=text, name=user["name"])
        db_session.add(post)
        await db_session.commit()
        return str(post.id)

    return _create_post


# --- Utility Fixtures ---


@pytest.fixture
def frozen_time():
    """
    Fixture for time-based testing using freezegun.

    Usage:
        with frozen_time("2026-02-01 12:00:00"):
            # time is frozen
    """
    from freezegun import freeze_time

    return freeze_time
