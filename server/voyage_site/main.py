"""FastAPI application initialization and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .core.config import settings
from .core.database import async_session_factory, close_db, engine, init_db
from .core.exceptions import (
    ProblemDetailsException,
    generic_exception_handler,
    problem_details_handler,
)
from .core.middleware import setup_middleware
from .core.observability import (
    SERVICE_NAME,
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_sqlalchemy,
    setup_metrics,
    setup_structured_logging,
    setup_tracing,
)
from .core.sessions import SessionRegistry
from .routers import (
    booking_router,
    health_router,
    metrics_router,
    performance_router,
    search_router,
    session_router,
)
from .services.content_service import ContentQueryService

# Configure structured logging
setup_structured_logging()

# Configure traditional logging for compatibility
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events for the FastAPI application.
    """
    logger.info("Starting FastAPI application")
    logger.info(f"Environment: {settings.environment}")

    try:
        setup_tracing()
        setup_metrics()
        instrument_sqlalchemy(engine)
        logger.info("Observability setup completed")

        # Production tables are owned by the hosted database
        if settings.debug:
            await init_db()
            logger.info("Development database initialized")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down FastAPI application")

    try:
        app.state.sessions.close_all()
        logger.info("Session contexts closed")

        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error during application cleanup: {e}")

    logger.info("Application shutdown complete")


def create_app(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        session_factory: Session factory for content queries; defaults to the
            configured database

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Voyage Site API",
        description="Booking availability, search content and client performance metrics for the voyage site",
        version=SERVICE_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    content = ContentQueryService(session_factory or async_session_factory)
    app.state.content = content
    app.state.sessions = SessionRegistry(content)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", settings.session_header],
    )

    setup_middleware(app, enable_logging=True)

    instrument_fastapi(app)

    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get(
        "/health",
        status_code=status.HTTP_200_OK,
        tags=["Health"],
        summary="Health Check",
        response_model=dict,
    )
    async def health_check():
        """Report that the service is up."""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "environment": settings.environment,
        }

    @app.get(
        "/ready",
        status_code=status.HTTP_200_OK,
        tags=["Health"],
        summary="Readiness Check",
        response_model=dict,
    )
    async def readiness_check():
        """Report readiness along with the number of live session contexts."""
        return {
            "status": "ready",
            "service": SERVICE_NAME,
            "active_sessions": len(app.state.sessions),
        }

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(booking_router)
    app.include_router(search_router)
    app.include_router(performance_router)
    app.include_router(session_router)

    logger.info("FastAPI application created and configured")

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "voyage_site.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
