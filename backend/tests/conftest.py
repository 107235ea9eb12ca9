"""
Pytest configuration and fixtures.
"""
import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import AsyncGenerator, Awaitable, Callable, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine shared by every session in a test."""
    from fieldservice.core.database import Base
    import fieldservice.models  # noqa: F401

    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield test_engine
    finally:
        await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """AsyncSession bound to the in-memory database."""
    async with session_factory() as session:
        yield session


class StubRedis:
    async def ping(self):
        return True


@pytest_asyncio.fixture
async def api_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX AsyncClient configured against the FastAPI app with test overrides."""
    from fieldservice.main import app
    from fieldservice.core.database import get_db
    from fieldservice.core.redis import get_redis
    from fieldservice.core.rate_limiter import limiter

    async def override_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_redis():
        return StubRedis()

    limiter.reset()
    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_redis] = override_redis
    app.state.test_db_override = override_db
    app.state.test_redis_override = override_redis

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_redis, None)
        for attr in ("test_db_override", "test_redis_override"):
            if hasattr(app.state, attr):
                delattr(app.state, attr)


@pytest.fixture
def register_user(api_client) -> Callable[..., Awaitable[Dict[str, str]]]:
    """Sign up and log in a user; returns its id, name, token and auth headers."""

    async def _register(name: str, email: str, password: str = "correct-horse-battery") -> Dict[str, str]:
        response = await api_client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        user = response.json()

        response = await api_client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        token = response.json()["access_token"]
        return {
            "id": user["id"],
            "name": name,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _register


@pytest.fixture
def new_request_body() -> Dict[str, str]:
    return {
        "serviceName": "Boiler inspection",
        "customerName": "Ada Lovelace",
        "phone": "555-0100",
        "email": "ada@example.com",
        "companyName": "Analytical Engines Ltd",
        "scheduledDateTime": "2024-01-01T09:00:00Z",
        "assignedTo": "Tech1",
        "status": "Pending",
    }
