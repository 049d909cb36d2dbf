"""
Database Configuration.

SQLAlchemy async engine and session management.

The engine lives on an explicitly constructed ``Database`` object rather
than in module globals. The application lifespan calls ``init()`` on
startup and ``teardown()`` on shutdown and stores the instance on
``app.state.database``; request handlers receive sessions through the
``get_db_session`` dependency.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.models.base import Base

logger = get_logger(__name__)


class Database:
    """
    Owner of the async engine and session factory.

    Usage:
        database = Database("sqlite+aiosqlite:///data/notes.db")
        await database.init()
        async with database.session() as session:
            ...
        await database.teardown()
    """

    def __init__(
        self,
        url: str,
        create_schema: bool = False,
        **engine_options: Any,
    ) -> None:
        self.url = url
        self.create_schema = create_schema
        self._engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_config(cls) -> "Database":
        """Build a Database from database.yaml and config/.env."""
        from notekeeper.backend.core.config import get_app_config, get_database_url

        db_config = get_app_config().database
        options: dict[str, Any] = {"echo": db_config.echo}
        if db_config.driver == "postgresql":
            options.update(
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
                pool_recycle=db_config.pool_recycle,
            )
        return cls(
            get_database_url(),
            create_schema=db_config.auto_create_schema,
            **options,
        )

    @property
    def engine(self) -> AsyncEngine:
        """
        Get the engine.

        Raises:
            RuntimeError: If init() has not been called
        """
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    async def init(self) -> None:
        """
        Create the engine, verify connectivity and, if enabled, the schema.

        Calling init() twice is a no-op.
        """
        if self._engine is not None:
            return

        options = dict(self._engine_options)
        if self.url.endswith(":memory:"):
            # One shared connection, otherwise every checkout sees an empty db
            options.setdefault("poolclass", StaticPool)
            options.setdefault("connect_args", {"check_same_thread": False})
        elif self.url.startswith("sqlite"):
            _ensure_sqlite_directory(self.url)

        self._engine = create_async_engine(self.url, **options)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async with self._engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if self.create_schema:
                await conn.run_sync(Base.metadata.create_all)

        logger.info(
            "Database initialized",
            extra={"dialect": self._engine.dialect.name, "create_schema": self.create_schema},
        )

    async def teardown(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    async def reset_schema(self) -> None:
        """Drop and recreate every table. Used by seeding."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    def session(self) -> AsyncSession:
        """Open a new session. Use as an async context manager."""
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._session_factory()

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-based SQLite database."""
    path = url.split(":///", 1)[-1]
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def get_database(request: Request) -> Database:
    """Get the Database bound to the running application."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits when the request handler succeeds and rolls back otherwise.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
