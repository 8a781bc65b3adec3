"""Custom middleware for request ids, client sessions, and request logging."""

import logging
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .config import settings
from .observability import REQUEST_COUNT, REQUEST_DURATION

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each request.

    The request ID is either extracted from the X-Request-ID header
    or generated if not present, and echoed on the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Middleware that resolves the client session of each request.

    Clients send their session id in a header; a new id is issued when the
    header is missing. The id is stored on ``request.state.session_id`` and
    returned on the response so the client can keep using it.
    ``request.state.session_issued`` tells whether the id was issued here.
    """

    def __init__(self, app: ASGIApp, header_name: Optional[str] = None):
        super().__init__(app)
        self.header_name = header_name or settings.session_header

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        session_id = request.headers.get(self.header_name)
        request.state.session_issued = not session_id
        if not session_id:
            session_id = uuid.uuid4().hex
        request.state.session_id = session_id

        response = await call_next(request)
        response.headers[self.header_name] = session_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs requests and records Prometheus request metrics.
    """

    def __init__(self, app: ASGIApp, skip_paths: Optional[list] = None):
        super().__init__(app)
        self.skip_paths = skip_paths or ["/health", "/metrics", "/favicon.ico"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.skip_paths:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)
        REQUEST_COUNT.labels(
            method=request.method, endpoint=endpoint, status_code=response.status_code
        ).inc()
        REQUEST_DURATION.labels(method=request.method, endpoint=endpoint).observe(duration)

        log_data = {
            "request_id": getattr(request.state, "request_id", "unknown"),
            "session_id": getattr(request.state, "session_id", "unknown"),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }

        if response.status_code >= 500:
            logger.error("HTTP request completed with server error", extra=log_data)
        elif response.status_code >= 400:
            logger.warning("HTTP request completed with client error", extra=log_data)
        else:
            logger.info("HTTP request completed successfully", extra=log_data)

        return response


def setup_middleware(app, enable_logging: bool = True) -> None:
    """
    Setup all middleware on the FastAPI app.

    Args:
        app: FastAPI application instance
        enable_logging: Whether to enable request logging middleware
    """
    # Last added runs first
    if enable_logging:
        app.add_middleware(LoggingMiddleware)

    app.add_middleware(SessionMiddleware)
    app.add_middleware(RequestIDMiddleware)
