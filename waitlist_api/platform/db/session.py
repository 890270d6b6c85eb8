from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from waitlist_api.platform.db.base import Base
from waitlist_api.platform.logger import get_logger

logger = get_logger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 1800,
        "pool_size": 20,
        "max_overflow": 30,  # (burst capacity)
        "pool_timeout": 30,
    }


class Database:
    """
    Storage handle shared by every request.

    Opened once at startup, closed on shutdown, and handed to services
    through the ``get_db`` dependency rather than imported as a global.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = create_async_engine(url, echo=echo, future=True, **_engine_options(url))
        self.sessionmaker = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )
        self.connected = False

    async def connect(self) -> None:
        """Create tables and indexes (including the unique email index)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.connected = True
        logger.info("Connected to database, indexes created")

    async def ping(self) -> bool:
        if not self.connected:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
        self.connected = False
        logger.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.sessionmaker() as session:
            try:
                yield session
            finally:
                await session.close()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
