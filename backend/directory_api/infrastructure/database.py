"""Database Engine & Sessions — one async engine per process, one session per request.

Invariants:
    - A session is rolled back when the request raises, and always closed
    - Error mapping (SQLAlchemyError → StoreError with operation/enterprise_id)
      belongs to the stores in infrastructure/enterprise_store.py, not here
    - Readiness never raises: health_check() reports False instead

Design Decisions:
    - Module-level db_manager set by init_db() in the FastAPI lifespan
    - expire_on_commit=False: rows returned after commit stay readable in async code
    - Pool sizing only for server databases; SQLite keeps SQLAlchemy's default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

logger = logging.getLogger(__name__)


def build_engine(
    database_url: str, pool_size: int = 20, max_overflow: int = 10,
) -> AsyncEngine:
    options = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
        )
    return create_async_engine(database_url, **options)


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(self, database_url: str, **engine_options):
        self.engine = build_engine(database_url, **engine_options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        """True when the database answers SELECT 1."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                f"Database readiness check failed: {e}",
                extra={"operation": "health_check"},
            )
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **engine_options) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **engine_options)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
