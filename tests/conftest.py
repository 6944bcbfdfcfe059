"""Test config and shared fixtures."""
import os

# Must be set before main/settings are imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_DIR", "logs/test")

import pytest
from typing import AsyncGenerator, Callable, Dict
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from main import app
import apps.models  # noqa: F401  registers every table
from apps.identity.models import User
from framework.database.manager import get_db
from framework.security import create_user_token


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Create async test database session on a fresh schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async_session_maker = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
async def client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client sharing the test session; auth goes through real tokens."""
    async def _get_db():
        yield async_session

    app.dependency_overrides[get_db] = _get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, name: str, email: str, role: str = "owner") -> User:
    user = User(name=name, email=email, hashed_password="not-a-real-hash", role=role)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def user_a(async_session: AsyncSession) -> User:
    return await _make_user(async_session, "Alice", "alice@example.com")


@pytest.fixture
async def user_b(async_session: AsyncSession) -> User:
    return await _make_user(async_session, "Bob", "bob@example.com")


@pytest.fixture
async def staff_user(async_session: AsyncSession) -> User:
    return await _make_user(async_session, "Sam", "sam@example.com", role="staff")


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    """Build an Authorization header for a user."""
    def _headers(user: User) -> Dict[str, str]:
        token = create_user_token(user.id, user.email, user.role)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def headers_a(user_a, auth_headers) -> Dict[str, str]:
    return auth_headers(user_a)


@pytest.fixture
def headers_b(user_b, auth_headers) -> Dict[str, str]:
    return auth_headers(user_b)
