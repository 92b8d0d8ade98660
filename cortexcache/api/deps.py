"""
API Dependency Injection Module

Provides the dependencies required by FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cortexcache.api.render import TemplateRenderer
from cortexcache.common.errors import ServerError
from cortexcache.db.session import get_db as _get_db
from cortexcache.middleware.session import Session
from cortexcache.repositories.sqlalchemy import SQLAlchemySnippetRepository
from cortexcache.services import SnippetService


async def get_db():
    """
    Get database session dependency

    Yields:
        AsyncSession: Async database session
    """
    async for session in _get_db():
        yield session


# Database session dependency type
DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_snippet_service(db: DbSession) -> SnippetService:
    """Get snippet service"""
    return SnippetService(SQLAlchemySnippetRepository(db))


def get_renderer(request: Request) -> TemplateRenderer:
    """Get the template renderer built at application startup"""
    return request.app.state.renderer


def get_session(request: Request) -> Session:
    """
    Get the current request's session

    Raises:
        ServerError: The route is not registered with SessionRoute
    """
    session = getattr(request.state, "session", None)
    if session is None:
        raise ServerError(
            message="Session requested on a route without session support",
            code="session_unavailable",
        )
    return session


# Dependency type aliases
SnippetServiceDep = Annotated[SnippetService, Depends(get_snippet_service)]
RendererDep = Annotated[TemplateRenderer, Depends(get_renderer)]
CurrentSession = Annotated[Session, Depends(get_session)]
