"""
Session Store Module

Persists session data for the session middleware on top of the key-value repositories.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cortexcache.db.redis import get_redis
from cortexcache.repositories.redis.kv_store_repo import RedisKVStoreRepository
from cortexcache.repositories.sqlalchemy.kv_store_repo import SQLAlchemyKVStoreRepository

KEY_PREFIX = "session:"


def _key(token: str) -> str:
    return f"{KEY_PREFIX}{token}"


class SessionStore(ABC):
    """Session Store Interface"""

    @abstractmethod
    async def find(self, token: str) -> Optional[str]:
        """Return the serialized session data for a token, or None if missing/expired."""
        pass

    @abstractmethod
    async def commit(self, token: str, data: str, ttl_seconds: int) -> None:
        """Save serialized session data under a token."""
        pass

    @abstractmethod
    async def delete(self, token: str) -> None:
        """Remove a session."""
        pass


class DatabaseSessionStore(SessionStore):
    """
    Database Session Store

    Opens its own database session per operation, independent of the
    request's session, so session writes never join handler transactions.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find(self, token: str) -> Optional[str]:
        async with self.session_factory() as db:
            record = await SQLAlchemyKVStoreRepository(db).get(_key(token))
        return record.value if record else None

    async def commit(self, token: str, data: str, ttl_seconds: int) -> None:
        async with self.session_factory() as db:
            await SQLAlchemyKVStoreRepository(db).set(_key(token), data, ttl_seconds)

    async def delete(self, token: str) -> None:
        async with self.session_factory() as db:
            await SQLAlchemyKVStoreRepository(db).delete(_key(token))

    async def cleanup_expired(self) -> int:
        """Delete every expired key-value row."""
        async with self.session_factory() as db:
            return await SQLAlchemyKVStoreRepository(db).cleanup_expired()


class RedisSessionStore(SessionStore):
    """Redis Session Store, relying on Redis TTL for expiry."""

    def _repo(self) -> RedisKVStoreRepository:
        return RedisKVStoreRepository(get_redis())

    async def find(self, token: str) -> Optional[str]:
        record = await self._repo().get(_key(token))
        return record.value if record else None

    async def commit(self, token: str, data: str, ttl_seconds: int) -> None:
        await self._repo().set(_key(token), data, ttl_seconds)

    async def delete(self, token: str) -> None:
        await self._repo().delete(_key(token))
