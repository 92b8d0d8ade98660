"""
Key-Value Store Repository SQLAlchemy Implementation
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cortexcache.common.time import utc_now_naive
from cortexcache.db.models import KeyValueStore
from cortexcache.domain.kv_store import KeyValueModel
from cortexcache.repositories.kv_store_repo import KVStoreRepository


def _expiry(ttl_seconds: Optional[int]):
    if not ttl_seconds or ttl_seconds <= 0:
        return None
    return utc_now_naive() + timedelta(seconds=ttl_seconds)


class SQLAlchemyKVStoreRepository(KVStoreRepository):
    """
    Key-Value Store Repository SQLAlchemy Implementation

    An expired row found by `get` is deleted on the spot; the rest are
    purged by `cleanup_expired` from the scheduler.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find(self, key: str) -> Optional[KeyValueStore]:
        result = await self.session.execute(
            select(KeyValueStore).where(KeyValueStore.key == key)
        )
        return result.scalar_one_or_none()

    async def get(self, key: str) -> Optional[KeyValueModel]:
        row = await self._find(key)
        if row is None:
            return None

        if row.expires_at is not None and row.expires_at <= utc_now_naive():
            await self.session.delete(row)
            await self.session.commit()
            return None

        return KeyValueModel.model_validate(row)

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> KeyValueModel:
        row = await self._find(key)
        if row is None:
            row = KeyValueStore(key=key, value=value, expires_at=_expiry(ttl_seconds))
            self.session.add(row)
        else:
            row.value = value
            row.expires_at = _expiry(ttl_seconds)

        await self.session.commit()
        await self.session.refresh(row)
        return KeyValueModel.model_validate(row)

    async def delete(self, key: str) -> bool:
        result = await self.session.execute(delete(KeyValueStore).where(KeyValueStore.key == key))
        await self.session.commit()
        return result.rowcount > 0

    async def cleanup_expired(self) -> int:
        result = await self.session.execute(
            delete(KeyValueStore).where(
                KeyValueStore.expires_at.is_not(None),
                KeyValueStore.expires_at <= utc_now_naive(),
            )
        )
        await self.session.commit()
        return result.rowcount
