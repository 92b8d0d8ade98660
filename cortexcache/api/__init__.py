"""
API Router Module Initialization
"""

from cortexcache.api.deps import get_db
from cortexcache.api.snippets import router as snippets_router

__all__ = [
    "get_db",
    "snippets_router",
]
