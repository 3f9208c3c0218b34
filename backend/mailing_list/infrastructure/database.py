"""Database Session Manager: one async engine, auto-rollback sessions, schema bootstrap.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - IntegrityError maps to ConflictError; every other SQLAlchemy failure maps to PersistenceError
    - ensure_schema() is idempotent: an existing table is success, never an error
    - Only SUPPORTED_BACKENDS are accepted; anything else fails at construction with PersistenceError
    - For SQLite, mutating store calls serialize on a single asyncio.Lock owned by the manager

Design Decisions:
    - Singleton db_manager initialized by the process runner: both front-ends
      share one engine (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - SQLite has no writer queue (concurrent writers get "database is locked"),
      so writes are serialized in-process; PostgreSQL relies on its own locking
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    ArgumentError, IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlalchemy import text

from mailing_list.core.errors import ConflictError, PersistenceError
from mailing_list.db.base import Base
import mailing_list.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

# backends with a native INSERT ... ON CONFLICT used by the store upsert
SUPPORTED_BACKENDS = frozenset({"sqlite", "postgresql"})


class DatabaseSessionManager:
    """Manages async database sessions with rollback, schema bootstrap, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        try:
            url = make_url(database_url)
        except ArgumentError as e:
            raise PersistenceError(str(e), "configure")
        backend = url.get_backend_name()
        if backend not in SUPPORTED_BACKENDS:
            raise PersistenceError(
                f"unsupported backend '{backend}' (expected one of "
                f"{', '.join(sorted(SUPPORTED_BACKENDS))})",
                "configure",
            )
        self.is_sqlite = backend == "sqlite"
        engine_kwargs: dict = {"pool_pre_ping": True}
        if self.is_sqlite:
            if url.database in (None, "", ":memory:"):
                # one shared connection, otherwise each session sees an empty db
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._write_lock = asyncio.Lock() if self.is_sqlite else None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"DB integrity error: {e}")
            raise ConflictError("Subscriber with this email already exists")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise PersistenceError(str(e.orig), "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise PersistenceError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise PersistenceError("Database operation failed", "unknown")
        finally:
            await session.close()

    def write_lock(self) -> AsyncContextManager:
        """Scoped writer serialization. No-op for engines with their own locking."""
        if self._write_lock is None:
            return contextlib.nullcontext()
        return self._write_lock

    async def ensure_schema(self) -> None:
        """Create the subscribers table if absent. Existing table is success."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except OperationalError as e:
            if "already exists" in str(e.orig):
                logger.info("Schema already present (created concurrently)")
                return
            raise PersistenceError(str(e.orig), "create schema")
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), "create schema")
        logger.info("Schema ready")

    async def health_check(self) -> bool:
        """Check database connectivity (for the readiness endpoint)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()


# Singleton (initialized by the process runner)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.close()
        db_manager = None


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the shared session manager."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
