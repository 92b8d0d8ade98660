"""
Data Access Layer Module Initialization
"""

from cortexcache.repositories.snippet_repo import SnippetRepository
from cortexcache.repositories.kv_store_repo import KVStoreRepository

__all__ = [
    "SnippetRepository",
    "KVStoreRepository",
]
