"""
Info API — Database Session Management
=======================================

What:  Async SQLAlchemy engine, session factory, declarative base, and the
       per-request session dependency.
How:   One engine per process; one session (and one transaction) per request.
       The dependency commits when the handler returns and rolls back when
       it raises, so an existence check and the write that follows it are
       atomic from the client's point of view.

Connection Pooling:
    Server databases (PostgreSQL) get an explicit pool_size/max_overflow.
    SQLite URLs skip those options: aiosqlite in-memory databases use a
    StaticPool that rejects them.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from info_api.config import settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """
    Keyword arguments for create_async_engine() appropriate to the URL.

    Echo is tied to DEBUG logging for SQL visibility during development.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

# expire_on_commit=False: responses are serialized after the commit,
# attributes must stay loaded
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for autogenerate.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits anything still pending
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns connection to pool)

    Steps 3-5 run after the response has been sent. Write operations
    therefore commit explicitly (AsyncRepository.commit) while the request
    is still open, so commit failures reach the exception handlers.

    Example usage:
        async def get_thema_repository(db: AsyncSession = Depends(get_db_session)):
            return ThemaRepository(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the application lifespan."""
    await engine.dispose()
