"""Database connection management using SQLModel with async drivers.

The ``Database`` object is built once at application startup, stored on
``app.state.db`` and handed to request handlers through ``get_session``.
"""

from typing import AsyncGenerator, Optional
from urllib.parse import urlparse, urlunparse

from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from rental_admin.config.logger import app_logger
from rental_admin.utils.errors import ServiceUnavailableError


def normalize_db_url(db_url: str) -> str:
    """Return a SQLAlchemy URL with an async driver.

    SQLite URLs are returned as-is (they already name aiosqlite). Postgres
    URLs are switched to asyncpg and lose their ``sslmode`` query parameter,
    which asyncpg does not understand.
    """
    if not db_url:
        raise ValueError("DATABASE_URL not configured")
    if db_url.startswith("sqlite"):
        return db_url

    parsed = urlparse(db_url)
    query_parts = [p for p in parsed.query.split("&") if not p.startswith("sslmode=") and p]
    clean_url = urlunparse(
        (
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            parsed.params,
            "&".join(query_parts),
            parsed.fragment,
        )
    )

    if clean_url.startswith("postgresql://"):
        clean_url = clean_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif clean_url.startswith("postgres://"):
        clean_url = clean_url.replace("postgres://", "postgresql+asyncpg://", 1)

    return clean_url


class Database:
    """Owns the async engine and session factory for one application."""

    def __init__(self, db_url: str):
        self.db_url = normalize_db_url(db_url)
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker] = None

    @property
    def is_initialized(self) -> bool:
        return self._session_maker is not None

    async def init(self) -> None:
        """Create the engine and all tables."""
        app_logger.info("Initializing database connection")

        engine_kwargs = {"echo": False}
        if self.db_url.startswith("postgresql+asyncpg://"):
            engine_kwargs.update(pool_size=20, max_overflow=0)

        self._engine = create_async_engine(self.db_url, **engine_kwargs)
        self._session_maker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        # Import all models to register them with SQLModel
        from rental_admin import models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        app_logger.info("Database initialized successfully")

    async def close(self) -> None:
        """Dispose of the engine."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
            app_logger.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Async context manager yielding a session."""
        if not self._session_maker:
            raise ServiceUnavailableError()

        async with self._session_maker() as session:
            yield session

    async def ping(self) -> tuple[bool, str]:
        """Run a lightweight health query against the database."""
        if not self._engine or not self._session_maker:
            return False, "Database not initialized"

        try:
            async with self._session_maker() as session:
                result = await session.execute(text("SELECT 1"))
                row = result.scalar()
                if row == 1:
                    return True, "Database connection healthy"
                return False, f"Unexpected response: {row}"
        except Exception as e:
            return False, f"Database query failed: {str(e)}"


def get_database(request: Request) -> Database:
    """Return the Database attached to the running application."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise ServiceUnavailableError()
    return db


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get a database session."""
    async with get_database(request).session() as session:
        yield session
