"""
Snippet Service Module

Provides business logic processing for snippets.
"""

import logging

from cortexcache.common.errors import NotFoundError
from cortexcache.domain.snippet import SnippetCreate, SnippetModel
from cortexcache.repositories.snippet_repo import SnippetRepository

logger = logging.getLogger(__name__)

# Number of snippets shown on the home page
LATEST_LIMIT = 10


class SnippetService:
    """
    Snippet Service

    Each call is a single repository round trip; nothing is cached or retried.
    """

    def __init__(self, repo: SnippetRepository):
        """
        Initialize Service

        Args:
            repo: Snippet Repository
        """
        self.repo = repo

    async def insert(self, title: str, content: str, expires_days: int) -> int:
        """
        Insert a Snippet

        Args:
            title: Snippet title
            content: Snippet body
            expires_days: Days until the snippet expires

        Returns:
            int: ID of the new snippet
        """
        snippet = await self.repo.create(
            SnippetCreate(title=title, content=content, expires_days=expires_days)
        )
        logger.info("Snippet created: id=%s, expires=%s", snippet.id, snippet.expires.isoformat())
        return snippet.id

    async def get(self, id: int) -> SnippetModel:
        """
        Get an Unexpired Snippet by ID

        Raises:
            NotFoundError: Snippet not found or already expired
        """
        snippet = await self.repo.get_active_by_id(id)
        if not snippet:
            raise NotFoundError(
                message=f"Snippet with id {id} not found",
                code="snippet_not_found",
            )
        return snippet

    async def latest(self) -> list[SnippetModel]:
        """Get the most recent unexpired snippets, newest first."""
        return await self.repo.get_latest(LATEST_LIMIT)
