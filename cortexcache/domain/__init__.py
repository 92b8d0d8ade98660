"""
Domain Model Module Initialization
"""

from cortexcache.domain.snippet import (
    SnippetCreate,
    SnippetModel,
    SnippetForm,
)
from cortexcache.domain.kv_store import KeyValueModel

__all__ = [
    # Snippet
    "SnippetCreate",
    "SnippetModel",
    "SnippetForm",
    # KV Store
    "KeyValueModel",
]
