"""Shared fixtures and environment setup for API tests."""

import os

# Set environment variables BEFORE any app imports
os.environ.setdefault("APP_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("APP_LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.main import app
from app.models import Base, Role, Tool, User
from app.utils.security import create_access_token, hash_password


@pytest.fixture
async def engine():
    """Fresh in-memory database per test, built from the ORM metadata."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    """Session for seeding and inspecting rows directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app with get_db bound to the test database."""

    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    # Unhandled errors become 500 responses instead of being re-raised in the test
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(db: AsyncSession, email: str, role: Role, **kwargs) -> User:
    user = User(
        email=email,
        password_hash=hash_password("password123"),
        first_name=email.split("@")[0].title(),
        role=role.value,
        **kwargs,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def auth_headers_for(user: User) -> dict:
    """Bearer header carrying a session for ``user``."""
    token = create_access_token(user.id, role=user.role, email=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def super_admin(db) -> User:
    return await _make_user(db, "root@example.com", Role.SUPER_ADMIN)


@pytest.fixture
async def admin_user(db) -> User:
    return await _make_user(db, "owner@example.com", Role.ADMIN)


@pytest.fixture
async def other_user(db) -> User:
    return await _make_user(db, "neighbour@example.com", Role.ADMIN)


@pytest.fixture
def super_admin_headers(super_admin) -> dict:
    return auth_headers_for(super_admin)


@pytest.fixture
def user_headers(admin_user) -> dict:
    return auth_headers_for(admin_user)


@pytest.fixture
def other_user_headers(other_user) -> dict:
    return auth_headers_for(other_user)


@pytest.fixture
async def tool(db) -> Tool:
    tool = Tool(name="Meal Planner", short_name="meals", price=3)
    db.add(tool)
    await db.commit()
    await db.refresh(tool)
    return tool


@pytest.fixture
async def second_tool(db) -> Tool:
    tool = Tool(name="Shopping List", short_name="shopping", price=2)
    db.add(tool)
    await db.commit()
    await db.refresh(tool)
    return tool
