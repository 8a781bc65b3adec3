"""Session router: explicit teardown of a client session context."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.dependencies import get_session_id, get_session_registry
from ..core.exceptions import NotFoundError
from ..core.sessions import SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/session", tags=["session"])


@router.delete("")
async def close_session(
    session_id: str = Depends(get_session_id),
    sessions: SessionRegistry = Depends(get_session_registry),
) -> JSONResponse:
    """
    Tear down the calling session's search data and performance metrics.

    Raises:
        NotFoundError: If the session has no context
    """
    if not sessions.close(session_id):
        raise NotFoundError(resource_type="session", resource_id=session_id)

    return JSONResponse(
        status_code=200,
        content={"session_id": session_id, "closed": True}
    )
