"""
Database Module Initialization
"""

from cortexcache.db.session import get_db, init_db, close_db, AsyncSessionLocal
from cortexcache.db.models import (
    Base,
    Snippet,
    KeyValueStore,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "Base",
    "Snippet",
    "KeyValueStore",
]
