"""
Ticklist Backend — Database Engine & Session Management
=========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` object owns the engine (and with it the connection pool).
       The application factory stores one on `app.state`; the session
       dependency reads it from there for every request.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Created once per application instance; sessions are created per-request.

Architecture Decision:
    The pool is an explicitly constructed object rather than a module-level
    engine. Tests hand the factory a Database bound to a throwaway SQLite
    file, and nothing at import time opens a connection.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    The pool is the only shared mutable resource in the service. It lends
    connections to concurrent requests; the application adds no locking.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ticklist.config import Settings
from ticklist.exceptions import DatabaseError


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for autogenerate
    and the test suite uses to create tables in SQLite.
    """
    pass


class Database:
    """
    Owns the async engine and hands out sessions.

    Attributes:
        engine:           AsyncEngine wrapping the connection pool
        session_factory:  async_sessionmaker bound to the engine
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: rows returned by a list call stay readable
        # after the session commits or closes
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        Build the engine from configuration.

        Pool arguments only apply to server databases; SQLite drivers choose
        their own pool class and reject pool_size/max_overflow.
        """
        engine_kwargs = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            # Echo SQL in DEBUG mode for development visibility
            "echo": settings.log_level == "DEBUG",
        }
        if make_url(settings.database_url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=settings.db_pool_recycle,
            )
        return cls(create_async_engine(settings.database_url, **engine_kwargs))

    async def dispose(self) -> None:
        """Close every pooled connection. Called from the shutdown half of the lifespan."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session comes from the Database attached to the running application,
    so handlers never reach for a global. Commits are issued by the resource
    layer itself; closing the session here returns the connection to the pool
    and rolls back anything left uncommitted. A failure to open the session
    is raised as DatabaseError, like any other database failure.

    Example usage in a route:
        @router.get("/crags")
        async def list_crags(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    try:
        session = database.session_factory()
    except (SQLAlchemyError, OSError) as e:
        raise DatabaseError(
            message="open session",
            context={"operation": "connect"},
        ) from e

    async with session:
        yield session
