"""Per-session state: the search data cache and the performance monitor."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..services.content_service import ContentQueryService
from ..services.performance import PerformanceMonitor
from ..services.search_data import SearchDataCache

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """State owned by one client session."""

    session_id: str
    search_data: SearchDataCache
    performance: PerformanceMonitor
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def close(self) -> None:
        self.search_data.clear_search_data()
        self.performance.clear_metrics()


class SessionRegistry:
    """
    Creates session contexts on first use and tears them down on request.

    Contexts are never evicted on their own; ``close()`` or ``close_all()``
    ends them.
    """

    def __init__(self, content: ContentQueryService):
        self.content = content
        self._sessions: dict[str, SessionContext] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str) -> Optional[SessionContext]:
        return self._sessions.get(session_id)

    def create(self, session_id: str) -> SessionContext:
        """Build a context without registering it."""
        return SessionContext(
            session_id=session_id,
            search_data=SearchDataCache(self.content),
            performance=PerformanceMonitor(session_id),
        )

    def get_or_create(self, session_id: str) -> SessionContext:
        context = self._sessions.get(session_id)
        if context is None:
            context = self.create(session_id)
            self._sessions[session_id] = context
            logger.info(
                "Session context created",
                extra={"session_id": session_id, "active_sessions": len(self._sessions)}
            )
        return context

    def close(self, session_id: str) -> bool:
        """
        Tear down a session context.

        Returns:
            bool: False when no such session exists
        """
        context = self._sessions.pop(session_id, None)
        if context is None:
            return False

        context.close()
        logger.info(
            "Session context closed",
            extra={"session_id": session_id, "active_sessions": len(self._sessions)}
        )
        return True

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)
