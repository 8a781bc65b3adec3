"""Search router: cached search box content and the search page render."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.dependencies import ContentService, CurrentSession
from ..core.lifecycle import RenderScope
from ..core.sessions import SessionContext
from ..schemas.search import SearchDataEntryResponse, SearchDataResponse, SearchPageResponse
from ..services.content_service import ContentQueryService
from ..services.search_loader import SearchDataServerLoader

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/search", tags=["search"])


def _search_data_response(session: SessionContext) -> JSONResponse:
    response_data = SearchDataResponse(
        session_id=session.session_id,
        entries={
            name: SearchDataEntryResponse.from_entry(entry)
            for name, entry in session.search_data.snapshot().items()
        }
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.get("/data", response_model=SearchDataResponse)
async def get_search_data(session: SessionContext = CurrentSession) -> JSONResponse:
    """
    Return the search box content of the calling session.

    Entries already loaded are served from the session cache; the others are
    fetched concurrently. A failed entry reports status ``error``.
    """
    await session.performance.track_api_call(
        "search-data",
        session.search_data.initialize_search_data
    )
    return _search_data_response(session)


@router.delete("/data", response_model=SearchDataResponse)
async def clear_search_data(session: SessionContext = CurrentSession) -> JSONResponse:
    """Drop the search box content cached for the calling session."""
    session.search_data.clear_search_data()

    logger.info("Search data cleared", extra={"session_id": session.session_id})

    return _search_data_response(session)


@router.get("/page", response_model=SearchPageResponse)
async def render_search_page(
    content: ContentQueryService = ContentService,
    session: SessionContext = CurrentSession,
) -> JSONResponse:
    """
    Render the search page payload.

    The four content queries run afresh on every render. A failed query
    leaves its slot empty and is listed in ``errors``.
    """
    scope = RenderScope("search")
    session.performance.track_page_load("search", scope)

    page = await SearchDataServerLoader(content).load().wait()
    scope.mount()

    if page.has_error is not None:
        logger.warning(
            "Search page rendered with failed queries",
            extra={"session_id": session.session_id, "errors": page.errors()}
        )

    response_data = SearchPageResponse(
        data=page.payload(),
        errors=page.errors(),
        is_loading=page.is_loading,
        has_error=page.has_error is not None,
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
