"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine/session maker
2. Base: declarative base for ORM models
3. Database class (session factory for DI-managed repositories)

SQLite (aiosqlite) is the default backend; any SQLAlchemy async URL
(e.g. postgresql+asyncpg://...) can be configured through DATABASE_URL.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


def _is_in_memory_sqlite(url: str) -> bool:
    return url.startswith('sqlite') and (':memory:' in url or url.rstrip('/').endswith(':'))


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    kwargs: dict[str, Any] = {'echo': echo}
    if url.startswith('sqlite'):
        kwargs['connect_args'] = {'check_same_thread': False}
        if _is_in_memory_sqlite(url):
            # One shared connection, otherwise each checkout sees an empty database
            kwargs['poolclass'] = StaticPool
    else:
        kwargs['pool_pre_ping'] = settings.DB_POOL_PRE_PING
    return create_async_engine(url, **kwargs)


class AsyncEngineManager:
    """
    Keeps the engine bound to the current event loop.

    Prevents "Task got Future attached to a different loop" errors when the
    app is driven from more than one loop (TestClient, CLI scripts).
    """

    def __init__(self, *, url: Optional[str] = None) -> None:
        self._url = url or settings.DATABASE_URL
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = build_engine(self._url, echo=settings.DB_ECHO)
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, recreating engine...')
                self._session_maker = None
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = build_engine(self._url, echo=settings.DB_ECHO)
            self._loop = current_loop

        assert self._engine is not None
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None


# Global engine manager
_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker()


async def dispose_engine() -> None:
    await _engine_manager.dispose()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Create database tables if they don't exist"""
    current_engine = engine or get_engine()
    async with current_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️ [DB] Tables ready')


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide async session for FastAPI dependency injection

    The session maker context manager closes the session on exit and rolls
    back anything left uncommitted.
    """
    session_maker = get_session_maker()
    async with session_maker() as session:
        yield session


class Database:
    """Session factory for repositories that run outside a Unit of Work (queries)"""

    def __init__(self, *, session_maker: Optional[async_sessionmaker[AsyncSession]] = None) -> None:
        self._session_maker = session_maker

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session_maker = self._session_maker or get_session_maker()
        async with session_maker() as session:
            yield session
