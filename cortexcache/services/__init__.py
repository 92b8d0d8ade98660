"""
Service Layer Module Initialization
"""

from cortexcache.services.snippet_service import SnippetService
from cortexcache.services.session_store import (
    SessionStore,
    DatabaseSessionStore,
    RedisSessionStore,
)

__all__ = [
    "SnippetService",
    "SessionStore",
    "DatabaseSessionStore",
    "RedisSessionStore",
]
