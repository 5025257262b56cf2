import asyncio
import logging
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pokemon_review import config
from pokemon_review.models import Base

logger = logging.getLogger(__name__)


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite does not enforce foreign keys unless asked to on every
    connection, so the pragma is switched on for sqlite URLs.
    """
    eng = create_async_engine(url, echo=config.SQL_ECHO, future=True, **kwargs)

    if eng.dialect.name == "sqlite":
        @event.listens_for(eng.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return eng


# Global async engine
engine: AsyncEngine = build_engine(config.DATABASE_URL)

# Session factory for getting AsyncSession objects
AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    class_=AsyncSession,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides the request's unit of work.

    Every repository resolved for the same request shares this session;
    it is closed once the response has been produced.
    """
    async with AsyncSessionLocal() as session:
        yield session


async def run_migrations(target: AsyncEngine | None = None) -> None:
    """
    Idempotent schema bootstrap with retry logic.

    - Waits for the database to be ready (exponential backoff, capped at 30s)
    - Creates every table declared on Base that does not exist yet
    """
    target = target or engine
    max_retries = max(config.DB_CONNECT_RETRIES, 1)
    retry_delay = config.DB_CONNECT_RETRY_DELAY

    for attempt in range(max_retries):
        try:
            async with target.begin() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database schema is ready")
            return

        except Exception as e:
            if attempt < max_retries - 1:
                wait_time = min(retry_delay * (2 ** attempt), 30)
                logger.warning(
                    "Database not ready (attempt %d/%d), retrying in %ss: %s",
                    attempt + 1, max_retries, wait_time, e,
                )
                await asyncio.sleep(wait_time)
            else:
                logger.error(
                    "Failed to connect to database after %d attempts: %s",
                    max_retries, e,
                )
                raise
