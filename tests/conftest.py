"""Shared test fixtures.

Every test gets a fresh SQLite database in its tmp dir, built from the ORM
metadata. Redis is left unconfigured so the rate limiter passes requests
through.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

os.environ["CQ_REDIS_URL"] = ""
os.environ["CQ_SEED_ON_STARTUP"] = "false"
os.environ["CQ_LOG_FORMAT"] = "console"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.config import get_settings
from cyberquest.database import close_db, get_engine, get_session, init_db
from cyberquest.db.models import Base
from cyberquest.main import create_app

UserFactory = Callable[..., Awaitable[dict[str, Any]]]


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[str, None]:
    """Initialize a throwaway SQLite database with all tables."""
    get_settings.cache_clear()
    url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    await init_db(url)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield url
    await close_db()
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client(database: str) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP test client bound to the test database."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session(database: str) -> AsyncGenerator[AsyncSession, None]:
    """Get a direct database session for service-level tests."""
    async for session in get_session():
        yield session
        break


@pytest_asyncio.fixture
async def seeded_client(client: AsyncClient) -> AsyncClient:
    """Client with the stock catalog loaded (3 quizzes, 4 activities, 6 challenges)."""
    response = await client.post("/api/seed")
    assert response.status_code == 200
    return client


@pytest_asyncio.fixture
async def make_user(client: AsyncClient) -> UserFactory:
    """Factory that registers a user through the API and returns its JSON."""

    async def _make_user(username: str, **overrides: Any) -> dict[str, Any]:  # noqa: ANN401
        payload = {
            "email": f"{username}@example.com",
            "username": username,
            "firstName": username.capitalize(),
            "lastName": "Tester",
            **overrides,
        }
        response = await client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_user
