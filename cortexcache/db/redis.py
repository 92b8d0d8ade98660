"""
Redis Client

Process-wide client for the Redis session store. Created in the application
lifespan only when SESSION_STORE_TYPE is "redis".
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from redis.asyncio import Redis

from cortexcache.config import get_settings

logger = logging.getLogger(__name__)

_redis_client: Optional[Redis] = None

LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


def _display_url(redis_url: str) -> str:
    """Redis URL with any password masked, for logging."""
    parsed = urlparse(redis_url)
    if not parsed.password:
        return redis_url
    return redis_url.replace(f":{parsed.password}@", ":***@", 1)


def _check_redis_security(redis_url: str) -> None:
    """Warn about password-less connections to remote hosts; session tokens travel in the clear."""
    parsed = urlparse(redis_url)
    if not parsed.password and parsed.hostname not in LOCAL_HOSTS:
        logger.warning(
            "Redis at %s has no password; session data is readable by anyone "
            "who can reach it. Use redis://:password@host:port/db",
            parsed.hostname,
        )


async def init_redis() -> None:
    """
    Connect to Redis

    Raises:
        redis.exceptions.ConnectionError: The server cannot be reached
    """
    global _redis_client

    if _redis_client is not None:
        logger.warning("Redis client already initialized")
        return

    redis_url = get_settings().REDIS_URL
    _check_redis_security(redis_url)

    client = Redis.from_url(redis_url, decode_responses=True)
    await client.ping()
    _redis_client = client
    logger.info("Redis session store connected: %s", _display_url(redis_url))


async def close_redis() -> None:
    global _redis_client

    if _redis_client is None:
        return

    await _redis_client.aclose()
    _redis_client = None
    logger.info("Redis connection closed")


def get_redis() -> Redis:
    """
    Get the Redis client

    Raises:
        RuntimeError: init_redis() has not been called
    """
    if _redis_client is None:
        raise RuntimeError("Redis client not initialized; is SESSION_STORE_TYPE set to 'redis'?")
    return _redis_client
