"""Health and Prometheus metrics routers."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from ..core.dependencies import get_session_registry
from ..core.observability import SERVICE_NAME, SERVICE_VERSION, get_prometheus_metrics
from ..core.sessions import SessionRegistry
from ..schemas.health import HealthResponse, HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/health", tags=["health"])

metrics_router = APIRouter(tags=["observability"])


@router.post("/ping", response_model=HealthResponse)
async def health_ping(sessions: SessionRegistry = Depends(get_session_registry)) -> JSONResponse:
    """
    Health check endpoint.

    Returns current service status, timestamp and the number of session
    contexts held in memory.
    """
    response_data = HealthResponse(
        status=HealthStatus.HEALTHY,
        service=SERVICE_NAME,
        timestamp=datetime.now(timezone.utc),
        version=SERVICE_VERSION,
        active_sessions=len(sessions),
    )

    logger.debug(
        "Health check requested",
        extra={"active_sessions": response_data.active_sessions}
    )

    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@metrics_router.get(
    "/metrics",
    summary="Prometheus Metrics",
    description="Endpoint for Prometheus to scrape metrics",
    response_class=Response,
)
async def metrics() -> Response:
    """Return Prometheus metrics in text format."""
    return Response(
        content=get_prometheus_metrics(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )
