"""
Snippet Repository Interface

Defines the data access interface for snippets.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cortexcache.domain.snippet import SnippetCreate, SnippetModel


class SnippetRepository(ABC):
    """Snippet Repository Interface"""

    @abstractmethod
    async def create(self, data: SnippetCreate) -> SnippetModel:
        """
        Create a snippet

        Creation time is the current UTC time; expiry is creation time plus
        `data.expires_days` days.

        Args:
            data: Creation data

        Returns:
            SnippetModel: The created snippet, with its assigned id
        """
        pass

    @abstractmethod
    async def get_active_by_id(self, id: int) -> Optional[SnippetModel]:
        """
        Get an unexpired snippet by ID

        Args:
            id: Snippet ID

        Returns:
            SnippetModel if found and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def get_latest(self, limit: int) -> list[SnippetModel]:
        """
        Get the most recently created unexpired snippets, newest first

        Args:
            limit: Maximum number of snippets to return

        Returns:
            list[SnippetModel]: At most `limit` snippets
        """
        pass
