"""
SQLAlchemy Repository Implementation Module Initialization
"""

from cortexcache.repositories.sqlalchemy.snippet_repo import SQLAlchemySnippetRepository
from cortexcache.repositories.sqlalchemy.kv_store_repo import SQLAlchemyKVStoreRepository

__all__ = [
    "SQLAlchemySnippetRepository",
    "SQLAlchemyKVStoreRepository",
]
