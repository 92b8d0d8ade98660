"""
Key-Value Store Repository Interface
"""

from abc import ABC, abstractmethod
from typing import Optional

from cortexcache.domain.kv_store import KeyValueModel


class KVStoreRepository(ABC):
    """
    Key-Value Store Repository Interface

    Keys with a TTL disappear once it has elapsed; implementations decide
    whether that happens lazily, in bulk, or natively in the backend.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[KeyValueModel]:
        """Live record for `key`, or None if missing or expired."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> KeyValueModel:
        """
        Insert or overwrite a key

        Args:
            key: Key
            value: Serialized value
            ttl_seconds: Lifetime in seconds; None or 0 keeps the key forever

        Returns:
            KeyValueModel: The stored record
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key; False if it did not exist."""
        pass

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Purge expired keys and return how many were removed."""
        pass
