"""Database lifecycle and async session management."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""


class Database:
    """
    Process-wide handle on the persistence store.

    Created once at application startup, stored on ``app.state`` and
    disposed on shutdown. Request handlers never touch it directly; they
    receive a per-request session through :func:`get_db`.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        is_sqlite = url.startswith("sqlite")
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=not is_sqlite,
            # In-memory SQLite must share one connection across sessions
            poolclass=StaticPool if is_sqlite else None,
            connect_args={"check_same_thread": False} if is_sqlite else {},
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self.connected = False
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Create all tables and verify the store is reachable."""
        # Register every model on Base.metadata before create_all
        from .. import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.connected = True

    async def ensure_connected(self) -> bool:
        """
        Connect now if startup could not reach the store.

        Returns True once the tables exist. A store that is still
        unreachable is logged and reported as False.
        """
        if self.connected:
            return True
        async with self._connect_lock:
            if self.connected:
                return True
            try:
                await self.connect()
            except (SQLAlchemyError, OSError) as e:
                logger.warning("Database still unavailable", extra={"error": str(e)})
                return False
        logger.info("Database connection recovered")
        return True

    async def ping(self) -> bool:
        """Return True if a trivial query succeeds."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed", extra={"error": str(e)})
            return False
        return True

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that is rolled back on error and always closed."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        self.connected = False


def get_database(request: Request) -> Database:
    """Return the database handle attached to the running application."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function that yields database sessions.

    Yields:
        AsyncSession: Database session
    """
    database = get_database(request)
    # A store that is still down surfaces as a query failure
    await database.ensure_connected()
    async with database.session() as session:
        yield session


# SQLSTATE for unique_violation; asyncpg errors carry it as ``sqlstate``
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return True if an integrity failure came from a unique constraint or index."""
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    # SQLite reports "UNIQUE constraint failed: <table>.<column>"
    return "unique constraint" in str(orig).lower()
