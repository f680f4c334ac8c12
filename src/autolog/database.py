"""Async engine and transactional sessions for the attachment store.

The engine is built from ``AUTOLOG_DATABASE_URL`` on first use. Both HTTP
requests and CLI commands go through :func:`session_scope`, so a unit of work
either commits as a whole or leaves nothing behind (an attachment row whose
target link fails is rolled back with it).
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from autolog.config import get_settings


_engine: AsyncEngine | None = None
_async_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, echo=settings.debug)
    return _engine


def get_async_session_maker() -> async_sessionmaker[AsyncSession]:
    global _async_session_maker
    if _async_session_maker is None:
        # Records are serialized after commit, so attributes must stay loaded.
        _async_session_maker = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_maker


@asynccontextmanager
async def session_scope(
    session_maker: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Open a session, commit on success and roll back on any error."""
    maker = session_maker or get_async_session_maker()
    async with maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request dependency: one transaction per attachment request."""
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """Create the account, target and attachment tables if missing."""
    from autolog.models import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    global _engine, _async_session_maker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_maker = None


def reset_db_state() -> None:
    """Forget the cached engine so the next use picks up new settings."""
    global _engine, _async_session_maker
    _engine = None
    _async_session_maker = None
