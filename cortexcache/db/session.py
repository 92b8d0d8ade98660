"""
Database Engine and Sessions

A single async engine per process. Requests get their own AsyncSession
through `get_db`; background jobs and the session store open sessions
from `AsyncSessionLocal` directly.
"""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cortexcache.config import Settings, get_settings


def engine_options(settings: Settings) -> dict[str, Any]:
    """Driver specific engine arguments."""
    options: dict[str, Any] = {"echo": settings.DEBUG}
    if settings.DATABASE_TYPE == "sqlite":
        # aiosqlite runs the connection in a worker thread
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


settings = get_settings()

engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    # Returned snippets are read after commit
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped database session

    Anything left uncommitted when the handler fails is rolled back.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the snippets and kv_store tables if they do not exist."""
    from cortexcache.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
