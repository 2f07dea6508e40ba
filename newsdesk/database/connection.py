"""SQLite database connection management with async support.

Uses aiosqlite for async operations and SQLAlchemy for ORM.
"""

from pathlib import Path

import structlog
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from newsdesk.config.settings import Settings

logger = structlog.get_logger(__name__)


def create_sqlite_engine(settings: Settings) -> AsyncEngine:
    """Create SQLite AsyncEngine."""
    db_path = Path(settings.sqlite_db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        echo=settings.debug,
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.close()

    logger.info("SQLite engine initialized", db_path=str(db_path))
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create SQLAlchemy session factory."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables in the database."""
    from newsdesk.database.schema import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")
