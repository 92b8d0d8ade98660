"""
Snippet Repository SQLAlchemy Implementation

Provides concrete database operation implementation for snippets.
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cortexcache.common.time import utc_now_naive
from cortexcache.db.models import Snippet as SnippetORM
from cortexcache.domain.snippet import SnippetCreate, SnippetModel
from cortexcache.repositories.snippet_repo import SnippetRepository


class SQLAlchemySnippetRepository(SnippetRepository):
    """
    Snippet Repository SQLAlchemy Implementation

    Uses SQLAlchemy ORM to implement database operations for snippets.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize Repository

        Args:
            session: Async database session
        """
        self.session = session

    def _to_domain(self, entity: SnippetORM) -> SnippetModel:
        """Convert ORM entity to domain model"""
        return SnippetModel.model_validate(entity)

    async def create(self, data: SnippetCreate) -> SnippetModel:
        """Create a snippet expiring `expires_days` days from now"""
        now = utc_now_naive()
        entity = SnippetORM(
            title=data.title,
            content=data.content,
            created=now,
            expires=now + timedelta(days=data.expires_days),
        )
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return self._to_domain(entity)

    async def get_active_by_id(self, id: int) -> Optional[SnippetModel]:
        """Get snippet by ID, returns None if not found or expired"""
        result = await self.session.execute(
            select(SnippetORM).where(
                SnippetORM.id == id,
                SnippetORM.expires > utc_now_naive(),
            )
        )
        entity = result.scalar_one_or_none()
        return self._to_domain(entity) if entity else None

    async def get_latest(self, limit: int) -> list[SnippetModel]:
        """Get up to `limit` unexpired snippets, newest first"""
        result = await self.session.execute(
            select(SnippetORM)
            .where(SnippetORM.expires > utc_now_naive())
            .order_by(SnippetORM.created.desc(), SnippetORM.id.desc())
            .limit(limit)
        )
        return [self._to_domain(entity) for entity in result.scalars().all()]
