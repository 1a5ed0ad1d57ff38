"""
Podcast Backend: Database Engine & Session Factory
===================================================

What:  Async SQLAlchemy engine, session factory, and declarative base.
How:   Creates an async engine with connection pooling (server databases) or
       a plain engine with foreign keys switched on (SQLite).
Who:   `repositories.Store` opens one session per unit of work from the factory.
When:  Engine is created at module import; sessions are created per operation.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour
"""

from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from podcast_backend.config import Settings, settings


def build_engine(database_url: str, config: Optional[Settings] = None) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite gets no pool sizing (its pools reject those arguments) and has
    `PRAGMA foreign_keys=ON` issued per connection so episode rows follow
    their podcast on delete.
    """
    config = config or settings

    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url, echo=config.log_level == "DEBUG")

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_async_engine(
        database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=config.db_pool_pre_ping,
        pool_recycle=3600,
        # SQL logging is noisy; only on in DEBUG
        echo=config.log_level == "DEBUG",
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: entities stay readable after the unit of work commits
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object used by Alembic and by `create_all()`.
    """
    pass


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_all(bind: AsyncEngine) -> None:
    """
    What:  Creates any missing tables for the registered models.
    When:  App startup when DB_CREATE_ALL is set, and in the test suite.
    """
    # Registers the mapped classes on Base.metadata
    import podcast_backend.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
