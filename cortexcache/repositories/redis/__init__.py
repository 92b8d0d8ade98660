"""
Redis Repository Implementation Module Initialization
"""

from cortexcache.repositories.redis.kv_store_repo import RedisKVStoreRepository

__all__ = [
    "RedisKVStoreRepository",
]
