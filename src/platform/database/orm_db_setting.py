"""
Async PostgreSQL engine, declarative Base and session providers.

get_async_session feeds the unit of work for every request. Database.session is the
per-call factory the DI container gives the user repository for login.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# Deterministic names so constraint errors point at the right table
NAMING_CONVENTION = {
    'ix': 'ix_%(table_name)s_%(column_0_name)s',
    'uq': 'uq_%(table_name)s_%(column_0_name)s',
    'ck': 'ck_%(table_name)s_%(constraint_name)s',
    'fk': 'fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s',
    'pk': 'pk_%(table_name)s',
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class AsyncEngineManager:
    """
    Engine and session maker tied to the event loop that created them.

    asyncpg connections cannot cross event loops, and every TestClient or
    asyncio.run() brings its own loop, so a new loop gets a new engine.
    """

    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def _running_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def get_engine(self) -> AsyncEngine:
        loop = self._running_loop()
        stale = loop is not None and loop is not self._loop
        if self._engine is None or stale:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, building a new engine')
            self._engine = create_async_engine(
                self._database_url or settings.DATABASE_URL_ASYNC,
                echo=settings.DB_ECHO,
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_POOL_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
                pool_pre_ping=settings.DB_POOL_PRE_PING,
            )
            self._session_maker = None
            self._loop = loop
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            # Entities are read back after commit to build responses
            self._session_maker = async_sessionmaker(engine, expire_on_commit=False)
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = self._session_maker = self._loop = None


_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker()


async def dispose_engine() -> None:
    await _engine_manager.dispose()


async def create_db_and_tables() -> None:
    # Registers every model on Base.metadata
    import src.service.reading_room.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info(f'🗄️  [DB] {len(Base.metadata.tables)} tables ensured')


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    # Closing the session rolls back anything left uncommitted
    async with get_session_maker()() as session:
        yield session


class Database:
    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with get_session_maker()() as session:
            yield session
