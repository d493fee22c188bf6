import logging
import os

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

import shared.models  # noqa: F401  registers every table on SQLModel.metadata
from shared.config import get_config

logger = logging.getLogger(__name__)

DATABASE_URL = get_config().db_url

async_engine = create_async_engine(DATABASE_URL, echo=False)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


enable_sqlite_foreign_keys(async_engine)

AsyncSessionFactory = async_sessionmaker(
    bind=async_engine,
    expire_on_commit=False,
)


async def init_db():
    url = make_url(DATABASE_URL)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        db_dir = os.path.dirname(url.database)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir)
    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema is ready")


async def close_db():
    """
    Dispose the engine and release the connection pool.
    """
    logger.info("Closing database connection pool...")
    await async_engine.dispose()
    logger.info("Database connection pool closed.")
