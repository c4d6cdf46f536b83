# meeting_agent/db/base.py

from __future__ import annotations

import contextlib
import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from meeting_agent.config import settings

log = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


# --- Engine & Session factory (created on first use) ---
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine; only async drivers (asyncpg, aiosqlite) are accepted."""
    if url.startswith("postgresql://") or url.startswith("postgresql+psycopg2://"):
        raise ValueError("DATABASE_URL must use the 'asyncpg' driver for async operations.")
    if url.startswith("sqlite://"):
        raise ValueError("DATABASE_URL must use the 'aiosqlite' driver for async operations.")
    log.info("Creating async database engine for %s", url.split("@")[-1])
    return create_async_engine(
        url, echo=(settings.ENVIRONMENT == "dev"), pool_pre_ping=True, future=True
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        if not settings.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is not configured")
        _engine = build_engine(settings.DATABASE_URL)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


@contextlib.asynccontextmanager
async def async_session_context(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session; commit on success, roll back and re-raise on error."""
    factory = session_factory or get_session_factory()
    session: AsyncSession = factory()
    log.debug("Entering async session context %s", id(session))
    try:
        yield session
        log.debug("Committing session %s from context", id(session))
        await session.commit()
    except Exception:
        log.exception("Rolling back session %s from context due to exception", id(session))
        await session.rollback()
        raise
    finally:
        log.debug("Closing session %s from context", id(session))
        await session.close()


async def create_db_and_tables(engine: AsyncEngine | None = None) -> None:
    """Create all tables registered on Base (dev and tests; prod uses alembic)."""
    import meeting_agent.core.meetings.models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("Database tables created")


async def drop_db_and_tables(engine: AsyncEngine | None = None) -> None:
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    log.info("Database tables dropped")


__all__ = [
    "Base", "AsyncSession", "build_engine", "build_session_factory",
    "get_engine", "get_session_factory", "async_session_context",
    "create_db_and_tables", "drop_db_and_tables",
]
