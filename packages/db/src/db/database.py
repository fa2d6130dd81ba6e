# This project was developed with assistance from AI tools.
"""Async SQLAlchemy engine, session factory and FastAPI session dependency."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from .config import db_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _engine_kwargs(url: str) -> dict:
    """Return dialect-specific engine options for SQLite vs PostgreSQL."""
    kwargs: dict = {"echo": db_settings.SQL_ECHO}
    if url.startswith("sqlite"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


def create_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, **_engine_kwargs(url))


engine = create_engine(db_settings.DATABASE_URL)

SessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class DatabaseService:
    """Thin wrapper around an engine for lifecycle and health checks."""

    def __init__(self, db_engine: AsyncEngine):
        self.engine = db_engine

    async def create_all(self) -> None:
        """Create missing tables (local dev and tests; production uses migrations)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Database health check failed")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


_db_service = DatabaseService(engine)


def get_db_service() -> DatabaseService:
    return _db_service


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed on success."""
    async with SessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
