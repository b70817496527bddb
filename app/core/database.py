"""
Database session management with async SQLAlchemy 2.0.

Provides:
- Async engine (PostgreSQL via asyncpg, SQLite via aiosqlite)
- Session factory with proper lifecycle
- Dependency injection for route handlers
"""

from typing import AsyncGenerator

import structlog
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import settings

logger = structlog.get_logger(__name__)


# Base class for all ORM models
class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class DatabaseManager:
    """
    Manages database engine and session lifecycle.

    One engine per application; tests build their own.
    """

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def init(self, database_url: str | None = None) -> None:
        """
        Initialize database engine and session factory.

        Called during application startup (lifespan event).
        """
        url = database_url or settings.database_url
        logger.info("database_initializing", dialect=url.split(":", 1)[0])

        engine_kwargs: dict = {"echo": settings.db_echo, "pool_pre_ping": True}
        if settings.is_development or url.startswith("sqlite"):
            # NullPool keeps dev and SQLite free of stale pooled connections
            engine_kwargs["poolclass"] = NullPool

        self._engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Don't expire objects after commit
            autoflush=False,  # Manual control over flushes
        )

        logger.info("database_initialized")

    async def create_tables(self) -> None:
        """Create all tables that don't exist yet."""
        # Import models so every table is registered on the metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """
        Close database connections.

        Called during application shutdown (lifespan event).
        """
        if self._engine:
            logger.info("database_closing")
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @property
    def engine(self) -> AsyncEngine:
        """Get the database engine."""
        if not self._engine:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._engine

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session that commits on success and rolls back on error.

        Yields:
            AsyncSession: Database session with automatic cleanup
        """
        if not self._session_factory:
            raise RuntimeError("Database not initialized. Call init() first.")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


# Global instance
db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        from app.core.database import get_db

        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db)):
            ...
    """
    async for session in db_manager.get_session():
        yield session
