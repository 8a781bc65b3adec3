"""Performance router: timing metrics of the calling session."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.dependencies import CurrentSession
from ..core.sessions import SessionContext
from ..schemas.performance import PerformanceMetricsResponse, PerformanceSummaryResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/performance", tags=["performance"])


@router.get("/summary", response_model=PerformanceSummaryResponse)
async def get_performance_summary(session: SessionContext = CurrentSession) -> JSONResponse:
    """Averages of the page load, component render and API call samples."""
    summary = session.performance.get_performance_summary()
    response_data = PerformanceSummaryResponse.model_validate(summary)
    return JSONResponse(status_code=200, content=response_data.model_dump())


@router.get("/metrics", response_model=PerformanceMetricsResponse)
async def export_performance_metrics(session: SessionContext = CurrentSession) -> JSONResponse:
    """Summary together with every recorded sample."""
    exported = session.performance.export_metrics()
    response_data = PerformanceMetricsResponse.model_validate(exported)
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.delete("/metrics", response_model=PerformanceSummaryResponse)
async def clear_performance_metrics(session: SessionContext = CurrentSession) -> JSONResponse:
    """Drop every recorded sample of the calling session."""
    session.performance.clear_metrics()

    logger.info("Performance metrics cleared", extra={"session_id": session.session_id})

    response_data = PerformanceSummaryResponse.model_validate(session.performance.get_performance_summary())
    return JSONResponse(status_code=200, content=response_data.model_dump())
