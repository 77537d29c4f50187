"""
Shared fixtures.

Every test gets its own in-memory SQLite database. Environment variables are
set before the application modules are imported, because settings and the
module-level engine are created at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from collabdocs.core.config import settings
from collabdocs.core.db import get_db, get_session_factory, init_models
from collabdocs.main import app


def make_token(username: str) -> str:
    """Signed bearer token whose subject is the given username"""
    return jwt.encode({"sub": username}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_headers_for(username: str) -> dict:
    return {"Authorization": f"Bearer {make_token(username)}"}


@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(bind=test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Session for service-level tests"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncClient:
    """
    HTTP client bound to the FastAPI app through ASGI transport.
    Each request gets a fresh session on the test database.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def sync_client():
    """
    Synchronous client for websocket tests.
    The database is created on the client's event loop, so REST calls and
    websocket sessions share it.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    factory = sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: factory

    with TestClient(app) as test_client:
        test_client.portal.call(init_models, test_engine)
        yield test_client
        test_client.portal.call(test_engine.dispose)

    app.dependency_overrides.clear()


@pytest.fixture
def alice_headers():
    return auth_headers_for("alice")


@pytest.fixture
def bob_headers():
    return auth_headers_for("bob")


@pytest.fixture
def carol_headers():
    return auth_headers_for("carol")


@pytest.fixture
def auth_headers():
    """Factory of Authorization headers for an arbitrary user"""
    return auth_headers_for


@pytest.fixture
def token_for():
    """Factory of raw bearer tokens, for websocket query strings"""
    return make_token
