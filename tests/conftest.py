"""
Test Configuration Module
"""

import logging

import pytest
import pytest_asyncio
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from cortexcache.db.models import Base


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    """
    Create async database engine for testing

    A file database (rather than :memory:) lets the request session and
    the session store use separate connections to the same data.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Clean up
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine"""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for the application

    The request database session and the session store both point at the
    test database.
    """
    from cortexcache.api.deps import get_db
    from cortexcache.main import app
    from cortexcache.middleware import SessionManager
    from cortexcache.services import DatabaseSessionStore

    original_manager = app.state.session_manager
    app.dependency_overrides[get_db] = lambda: db_session
    app.state.session_manager = SessionManager(DatabaseSessionStore(session_factory))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
    app.state.session_manager = original_manager


@pytest.fixture
def app_logs(caplog):
    """
    caplog for the application loggers

    The "cortexcache" logger does not propagate to the root logger once
    logging is configured, so the capture handler is attached to it directly.
    """
    app_logger = logging.getLogger("cortexcache")
    propagate = app_logger.propagate
    app_logger.propagate = False
    app_logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="cortexcache")
    yield caplog
    app_logger.removeHandler(caplog.handler)
    app_logger.propagate = propagate
