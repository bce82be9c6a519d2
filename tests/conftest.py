"""Shared pytest fixtures configured to use SQLite in-memory databases."""

import logging
import os

# Must be set before notebox is imported: settings are read at import time.
os.environ.setdefault("NOTEBOX_SKIP_LIFESPAN_DB", "1")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "testing")

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notebox.core.models import BaseModel
from notebox.database import get_db_session
from notebox.main import app

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

DEFAULT_PASSWORD = "TestPassword123!"


@pytest.fixture
async def test_engine():
    """Fresh in-memory SQLite engine per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite only enforces ON DELETE CASCADE with this pragma
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    """Database session for repository tests."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def test_app(session_factory):
    """FastAPI app wired to the per-test database."""

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def make_client(test_app):
    """Factory for independent clients, each with its own cookie jar."""
    clients = []

    def _make() -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
async def async_client(make_client):
    """Anonymous async test client."""
    return make_client()


@pytest.fixture
def user_payload():
    """Unique signup payload."""
    suffix = uuid4().hex[:8]
    return {
        "username": f"user_{suffix}",
        "email": f"user_{suffix}@example.com",
        "password": DEFAULT_PASSWORD,
    }


@pytest.fixture
def signed_in_client(make_client):
    """Factory: sign up a fresh user and return (client, user_json)."""

    async def _signed_in(email=None, username=None):
        client = make_client()
        suffix = uuid4().hex[:8]
        payload = {
            "username": username or f"user_{suffix}",
            "email": email or f"user_{suffix}@example.com",
            "password": DEFAULT_PASSWORD,
        }
        resp = await client.post("/api/auth/signup", json=payload)
        assert resp.status_code == 201, resp.text
        resp = await client.post(
            "/api/auth/signin", json={"email": payload["email"], "password": payload["password"]}
        )
        assert resp.status_code == 200, resp.text
        return client, resp.json()["user"]

    return _signed_in


@pytest.fixture
async def auth_client(signed_in_client):
    """A client signed in as a fresh user."""
    client, _ = await signed_in_client()
    return client
