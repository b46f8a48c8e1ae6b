"""Database Sessions — one async engine per process, one session per request.

Invariants:
    - A session that leaves its block through an exception is rolled back and closed
    - SQLAlchemy faults escaping a request session surface as DatabaseError
      (repositories catch their own faults first; this is the outer net)
    - Pool sizing applies only to server backends; SQLite keeps its default pool

Design Decisions:
    - Module-level db_manager set by the FastAPI lifespan, read through the
      module attribute so tests and probes see re-initialization
    - expire_on_commit=False: rows loaded before commit stay readable after it,
      which the redirect-after-write flow relies on
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dashboard.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# First match wins; SQLAlchemyError is the catch-all.
_SESSION_FAULTS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Invoice data violates a database constraint.", "commit"),
    (OperationalError, "Invoice database is unreachable.", "connect"),
    (SQLAlchemyError, "Invoice database operation failed.", "query"),
)


def engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    """Engine kwargs for the backend named in database_url."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(self, database_url: str, pool_size: int = 20, max_overflow: int = 10):
        self.engine = create_async_engine(
            database_url, **engine_options(database_url, pool_size, max_overflow),
        )
        self._sessions = async_sessionmaker(self.engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        db = self._sessions()
        try:
            yield db
        except SQLAlchemyError as e:
            await db.rollback()
            message, operation = _classify(e)
            logger.error(f"{message} ({type(e).__name__}: {e})")
            raise DatabaseError(message, operation) from e
        finally:
            await db.close()

    async def ping(self) -> bool:
        """True when a trivial query round-trips; used by the readiness probe."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Database ping failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


def _classify(error: SQLAlchemyError) -> tuple[str, str]:
    for fault, message, operation in _SESSION_FAULTS:
        if isinstance(error, fault):
            return message, operation
    raise AssertionError("unreachable: SQLAlchemyError is the last entry")


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as db:
        yield db
