"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. The DatabaseManager is created by the
application's composition root (the FastAPI lifespan or a CLI command) and
handed to whoever needs it; there is no process-wide instance.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from minibase.core.config import Settings
from minibase.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def configure_sqlite_engine(engine: AsyncEngine, settings: Settings | None = None) -> None:
    """Make SQLite run DDL inside transactions and apply pragmas.

    The sqlite3 driver only opens a transaction before DML statements, so a
    CREATE TABLE followed by a failed INSERT would leave the table behind.
    Disabling the driver's implicit BEGIN and emitting it ourselves puts DDL
    and DML in the same transaction.

    Transactions start with BEGIN IMMEDIATE so concurrent writers wait on
    busy_timeout. A deferred BEGIN fails with SQLITE_BUSY at once when its
    read lock cannot be upgraded to a write lock.

    Args:
        engine: An async engine bound to a SQLite database.
        settings: Optional settings holding pragma values.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            if settings is not None:
                cursor.execute(f"PRAGMA busy_timeout = {int(settings.db_sqlite_busy_timeout)}")
                cursor.execute(
                    f"PRAGMA foreign_keys = {'ON' if settings.db_sqlite_foreign_keys else 'OFF'}"
                )
                if not settings.database_url.endswith(":memory:"):
                    cursor.execute(f"PRAGMA journal_mode = {settings.db_sqlite_journal_mode}")
                    cursor.execute(f"PRAGMA synchronous = {settings.db_sqlite_synchronous}")
        finally:
            cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class DatabaseManager:
    """Database connection and session manager.

    Owns the async engine (and with it the connection pool) plus the
    session factory. Sessions borrow a pooled connection for the duration
    of one unit of work.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize the database manager.

        Args:
            settings: Application settings.
        """
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            options: dict = {"echo": self.settings.db_echo}

            # In-memory SQLite gets a static single-connection pool
            if not self.settings.database_url.endswith(":memory:"):
                options.update(
                    pool_size=self.settings.db_pool_size,
                    max_overflow=self.settings.db_max_overflow,
                    pool_timeout=self.settings.db_pool_timeout,
                    pool_recycle=self.settings.db_pool_recycle,
                )
            if self.settings.is_sqlite:
                options["connect_args"] = {"check_same_thread": False}

            self._engine = create_async_engine(self.settings.database_url, **options)
            if self.settings.is_sqlite:
                configure_sqlite_engine(self._engine, self.settings)

            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create the fixed tables (users and collection metadata).

        Per-collection tables are not part of the ORM metadata; they are
        created lazily by the collection store.
        """
        # Register models with Base.metadata
        from minibase.infrastructure.persistence.models import (  # noqa: F401
            CollectionModel,
            UserModel,
        )

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def disconnect(self) -> None:
        """Close the database engine and all pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session that is rolled back if the block raises.

        Example:
            async with db.session() as session:
                users = await UserService(session).list_users()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if database connection is working."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


async def init_database(db: DatabaseManager) -> None:
    """Prepare the database for serving.

    Creates the SQLite file's directory if needed, checks connectivity and
    creates the fixed tables.

    Raises:
        RuntimeError: If the database cannot be reached.
    """
    url = make_url(db.settings.database_url)
    if db.settings.is_sqlite and url.database and url.database != ":memory:":
        db_dir = Path(url.database).parent
        db_dir.mkdir(parents=True, exist_ok=True)

    if not await db.check_connection():
        raise RuntimeError("Failed to connect to database")

    await db.create_tables()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request.

    The DatabaseManager lives on ``app.state.db``.
    """
    db: DatabaseManager = request.app.state.db
    async with db.session() as session:
        yield session
