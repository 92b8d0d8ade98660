"""
Key-Value Store Repository Redis Implementation

Redis expires keys itself, so there is nothing for the cleanup job to do.
"""

import json
from datetime import timedelta
from typing import Optional

from redis.asyncio import Redis

from cortexcache.common.time import utc_now
from cortexcache.domain.kv_store import KeyValueModel
from cortexcache.repositories.kv_store_repo import KVStoreRepository


class RedisKVStoreRepository(KVStoreRepository):
    """
    Key-Value Store Repository Redis Implementation

    Each key holds a JSON document: {"value", "created_at", "updated_at", "expires_at"}.
    """

    def __init__(self, client: Redis):
        self.client = client

    async def get(self, key: str) -> Optional[KeyValueModel]:
        raw = await self.client.get(key)
        if raw is None:
            return None
        return KeyValueModel(key=key, **json.loads(raw))

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> KeyValueModel:
        now = utc_now()
        ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else None

        existing = await self.client.get(key)
        created_at = json.loads(existing)["created_at"] if existing is not None else now.isoformat()

        document = {
            "value": value,
            "created_at": created_at,
            "updated_at": now.isoformat(),
            "expires_at": (now + timedelta(seconds=ttl)).isoformat() if ttl else None,
        }
        await self.client.set(key, json.dumps(document), ex=ttl)
        return KeyValueModel(key=key, **document)

    async def delete(self, key: str) -> bool:
        return await self.client.delete(key) > 0

    async def cleanup_expired(self) -> int:
        return 0
