"""
ScholarThynk Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a brand-new in-memory SQLite database (aiosqlite) with
       the `items` table created, so tests exercise real queries without
       needing PostgreSQL.

Fixture Hierarchy (all function-scoped):
    db_engine → session_factory → db_session → store
    session_factory → test_client (HTTP, get_db_session overridden)
    make_token / auth_headers: signed bearer tokens for the HTTP tests
"""

import os

# Override settings BEFORE any scholarthynk import reads them
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-not-real-0123456789abcdef"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ATOMIC_TREE_MUTATIONS"] = "false"

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from scholarthynk.config import settings
from scholarthynk.database import Base, get_db_session
from scholarthynk.models.item import Item  # noqa: F401
from scholarthynk.services.document_store import DocumentStore

OWNER = "user-1"
OTHER_OWNER = "user-2"


@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory database per test.

    StaticPool keeps the single SQLite connection alive across sessions;
    without it every new connection would see an empty database.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session):
    """Best-effort store: every write is committed immediately."""
    return DocumentStore(db_session)


@pytest.fixture
def make_token():
    """
    Signs a bearer token the way the login service does.

    Usage:
        headers = {"Authorization": f"Bearer {make_token('user-2')}"}
    """
    def _make(owner_id: str = OWNER, **claims) -> str:
        payload = {settings.jwt_owner_claim: owner_id, **claims}
        return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    The per-request session dependency is swapped for one bound to this
    test's database; everything else (auth, handlers, middleware) is real.
    """
    from scholarthynk.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
