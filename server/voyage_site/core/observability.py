"""Observability setup for OpenTelemetry, Prometheus metrics, and structured logging."""

import logging

import structlog
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from .config import settings

SERVICE_NAME = "voyage-site-api"
SERVICE_VERSION = "1.0.0"

# Prometheus metrics
REGISTRY = CollectorRegistry()

REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code'],
    registry=REGISTRY
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=REGISTRY
)

# Business metrics
BOOKING_DATES_SERVED = Counter(
    'voyage_booking_dates_served_total',
    'Travel dates returned by the booking dates endpoint',
    ['voyage_slug'],
    registry=REGISTRY
)

CONTENT_FETCH_FAILURES = Counter(
    'voyage_content_fetch_failures_total',
    'Failed search data fetches',
    ['entry'],
    registry=REGISTRY
)

API_CALL_DURATION = Histogram(
    'voyage_api_call_duration_seconds',
    'Duration of tracked API calls in seconds',
    ['api_name'],
    registry=REGISTRY
)


def setup_structured_logging():
    """Configure structured logging with structlog."""

    def add_trace_context(logger, method_name, event_dict):
        """Add trace context to log events."""
        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            event_dict['trace_id'] = format(ctx.trace_id, '032x')
            event_dict['span_id'] = format(ctx.span_id, '016x')
        return event_dict

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _resource() -> Resource:
    return Resource.create({
        "service.name": SERVICE_NAME,
        "service.version": SERVICE_VERSION,
        "environment": settings.environment,
    })


def setup_tracing():
    """Setup OpenTelemetry tracing."""
    provider = TracerProvider(resource=_resource())
    trace.set_tracer_provider(provider)

    if settings.otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint))
        )

    return trace.get_tracer(__name__)


def setup_metrics():
    """Setup OpenTelemetry metrics."""
    if settings.otlp_endpoint:
        reader = PeriodicExportingMetricReader(
            exporter=OTLPMetricExporter(endpoint=settings.otlp_endpoint),
            export_interval_millis=60000,
        )
        metrics.set_meter_provider(MeterProvider(resource=_resource(), metric_readers=[reader]))

    return metrics.get_meter(__name__)


def instrument_fastapi(app):
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app)


def instrument_sqlalchemy(engine):
    """Instrument the SQLAlchemy engine with OpenTelemetry."""
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)


def get_prometheus_metrics():
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)


class StructuredLogger:
    """Structured logger with bound context."""

    def __init__(self, logger):
        self.logger = logger

    def info(self, message: str, **kwargs):
        """Log info message with context."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with context."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with context."""
        self.logger.error(message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message with context."""
        self.logger.debug(message, **kwargs)

    def with_context(self, **kwargs) -> "StructuredLogger":
        """Return a logger with additional bound context."""
        return StructuredLogger(self.logger.bind(**kwargs))


def get_logger(name: str, **context) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(structlog.get_logger(name, **context))
