"""FastAPI routers package."""

from .booking import router as booking_router
from .health import metrics_router
from .health import router as health_router
from .performance import router as performance_router
from .search import router as search_router
from .session import router as session_router

__all__ = [
    "booking_router",
    "health_router",
    "metrics_router",
    "performance_router",
    "search_router",
    "session_router",
]
