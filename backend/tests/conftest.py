"""
Info API — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set BEFORE any info_api import so the
       settings singleton and module-level engine point at SQLite.

Fixture Hierarchy (all function-scoped):
    db_engine ─┬─ session_factory ─┬─ db_session        real AsyncSession on in-memory SQLite
               │                   └─ test_client       httpx AsyncClient, get_db_session overridden
               └─ (schema created per test, so every test starts empty)
    mock_thema_repository                               AsyncMock-backed repository for unit tests
    sample_thema_data                                   field values for a stored Thema
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["APPLICATION_NAME"] = "infoApp"
os.environ["API_PREFIX"] = "/api"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from info_api.database import Base, get_db_session  # noqa: E402
from info_api.models.thema import Thema  # noqa: E402, F401


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory SQLite database with the schema created.

    StaticPool keeps one connection alive, otherwise each new connection
    would open a new, empty in-memory database.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """A real session for repository tests. Not committed; discarded with the engine."""
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    get_db_session is overridden with the same commit/rollback contract,
    bound to the per-test in-memory database.

    Usage:
        async def test_get(test_client):
            response = await test_client.get("/api/themas/1")
    """
    from info_api.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_thema_repository():
    """
    A repository double whose methods are AsyncMocks.

    save() echoes its argument and assigns id=1 to new entities, like the
    database would on insert.
    """
    async def fake_save(entity):
        if entity.id is None:
            entity.id = 1
        return entity

    repository = MagicMock()
    repository.save = AsyncMock(side_effect=fake_save)
    repository.find_by_id = AsyncMock(return_value=None)
    repository.exists_by_id = AsyncMock(return_value=True)
    repository.find_all = AsyncMock()
    repository.delete_by_id = AsyncMock(return_value=None)
    repository.commit = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def sample_thema_data():
    return {
        "id": 1,
        "name": "A",
        "rechte": "R",
        "displaycount": 0,
    }
