# This project was developed with assistance from AI tools.
"""Async SQLAlchemy engine, declarative base, and session dependency."""

import logging
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .config import db_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class DatabaseService:
    """Owns one async engine and its session factory."""

    def __init__(self, url: str, *, echo: bool = False, pool_size: int | None = None):
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        if pool_size is not None and not url.startswith("sqlite"):
            engine_kwargs["pool_size"] = pool_size
        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create tables for every registered model (local dev and tests)."""
        from . import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


_db_service: DatabaseService | None = None


def get_db_service() -> DatabaseService:
    """Return the process-wide DatabaseService, creating it on first use."""
    global _db_service  # noqa: PLW0603
    if _db_service is None:
        _db_service = DatabaseService(
            db_settings.DATABASE_URL,
            echo=db_settings.SQL_ECHO,
            pool_size=db_settings.POOL_SIZE,
        )
        logger.info("Database engine created")
    return _db_service


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: yield a session, rolling back on error."""
    async with get_db_service().session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
