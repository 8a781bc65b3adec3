"""FastAPI dependencies for database sessions, content queries, and client sessions."""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..services.content_service import ContentQueryService
from .database import get_async_session
from .sessions import SessionContext, SessionRegistry


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Database dependency that provides async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async for session in get_async_session():
        yield session


def get_content_service(request: Request) -> ContentQueryService:
    """Content query service attached to the application."""
    return request.app.state.content


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_session_id(request: Request) -> str:
    """Session id resolved by ``SessionMiddleware``."""
    return request.state.session_id


def get_session_context(
    request: Request,
    session_id: str = Depends(get_session_id),
    sessions: SessionRegistry = Depends(get_session_registry),
) -> SessionContext:
    """
    Session context of the calling client, created on first use.

    A request without a session header gets a context that lives for that
    request only; the registry keeps contexts of client-supplied ids.

    Returns:
        SessionContext: Search data cache and performance monitor of the session
    """
    if getattr(request.state, "session_issued", False):
        return sessions.create(session_id)
    return sessions.get_or_create(session_id)


DatabaseSession = Depends(get_db)
ContentService = Depends(get_content_service)
CurrentSession = Depends(get_session_context)
