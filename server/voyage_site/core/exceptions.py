"""Problem Details (RFC 9457) exceptions and handlers."""

import errno
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProblemDetailsException(HTTPException):
    """
    Base exception class following RFC 9457 Problem Details for HTTP APIs.

    https://tools.ietf.org/rfc/rfc9457.txt
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize Problem Details exception.

        Args:
            status_code: HTTP status code
            title: Short, human-readable summary of the problem type
            detail: Human-readable explanation specific to this occurrence
            type_uri: URI reference that identifies the problem type
            instance: URI reference that identifies the specific occurrence
            extensions: Additional problem-specific information
            headers: HTTP headers to include in response
        """
        self.title = title
        self.type_uri = type_uri or f"about:blank#{status_code}"
        self.instance = instance
        self.extensions = extensions or {}

        self.problem_details: Dict[str, Any] = {
            "type": self.type_uri,
            "title": title,
            "status": status_code,
        }
        if detail:
            self.problem_details["detail"] = detail
        if instance:
            self.problem_details["instance"] = instance
        self.problem_details.update(self.extensions)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(ProblemDetailsException):
    """Exception for resource not found errors."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        if not detail:
            detail = f"The requested {resource_type}"
            if resource_id:
                detail += f" with ID '{resource_id}'"
            detail += " could not be found"

        extensions = {"resource_type": resource_type}
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=detail,
            type_uri="https://example.com/problems/resource-not-found",
            instance=instance,
            extensions=extensions,
        )


def describe_error(exc: BaseException) -> Dict[str, Any]:
    """
    Describe a captured upstream error as a JSON-safe mapping.

    The code is the SQLSTATE of the database error when the driver reports
    one, or the errno name of an OS-level connection failure.
    """
    error: Dict[str, Any] = {
        "type": type(exc).__name__,
        "message": str(exc),
    }
    code = _error_code(exc)
    if code is not None:
        error["code"] = code
    return error


def _error_code(exc: BaseException) -> Optional[str]:
    # SQLAlchemy keeps the driver exception on ``orig``
    orig = getattr(exc, "orig", None)
    for source in (orig, exc):
        sqlstate = getattr(source, "sqlstate", None) or getattr(source, "pgcode", None)
        if sqlstate:
            return str(sqlstate)
    for source in (orig, exc):
        if isinstance(source, OSError) and source.errno is not None:
            return errno.errorcode.get(source.errno, str(source.errno))
    return None


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    """
    Exception handler for Problem Details exceptions.

    Args:
        request: FastAPI request object
        exc: Problem Details exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.problem_details,
        headers=exc.headers,
        media_type="application/problem+json",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler that converts unhandled exceptions to Problem Details format.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    error_id = str(uuid.uuid4())
    logger.error(
        "Unhandled exception",
        extra={"error_id": error_id, "path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )

    problem_details = {
        "type": "https://example.com/problems/internal-server-error",
        "title": "Internal Server Error",
        "status": 500,
        "detail": "An unexpected error occurred while processing the request",
        "instance": str(request.url),
        "error_id": error_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    return JSONResponse(
        status_code=500,
        content=problem_details,
        media_type="application/problem+json",
    )
