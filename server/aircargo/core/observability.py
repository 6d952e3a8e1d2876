"""Observability setup for OpenTelemetry, metrics, and structured logging."""

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

SERVICE_NAME = "aircargo-api"
SERVICE_VERSION = "1.0.0"

# Prometheus metrics
REGISTRY = CollectorRegistry()

# Request metrics
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
BOOKINGS_CREATED = Counter(
    'cargo_bookings_created_total',
    'Total cargo bookings created',
    registry=REGISTRY
)

BOOKING_TRANSITIONS = Counter(
    'cargo_booking_transitions_total',
    'Booking status transitions applied',
    ['action', 'status'],
    registry=REGISTRY
)

BOOKING_TRANSITIONS_REJECTED = Counter(
    'cargo_booking_transitions_rejected_total',
    'Booking status transitions rejected',
    ['action', 'reason'],
    registry=REGISTRY
)

ROUTE_SEARCHES = Counter(
    'route_searches_total',
    'Itinerary searches performed',
    registry=REGISTRY
)

ROUTES_RETURNED = Histogram(
    'route_search_results',
    'Number of routes returned per search',
    ['kind'],
    buckets=(0, 1, 2, 3, 5, 10, 25, 50),
    registry=REGISTRY
)

_instrumented = {"sqlalchemy": False}


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

    # Export only when a collector is configured
    if settings.otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint)))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(SERVICE_NAME)


def setup_metrics():
    """Setup OpenTelemetry metrics."""
    if settings.otlp_endpoint:
        reader = PeriodicExportingMetricReader(
            exporter=OTLPMetricExporter(endpoint=settings.otlp_endpoint),
            export_interval_millis=60000,
        )
        metrics.set_meter_provider(MeterProvider(resource=_resource(), metric_readers=[reader]))

    return metrics.get_meter(SERVICE_NAME)


def instrument_fastapi(app):
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app)


def instrument_sqlalchemy(engine):
    """Instrument the async engine's sync core with OpenTelemetry."""
    if _instrumented["sqlalchemy"]:
        return
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)
    _instrumented["sqlalchemy"] = True


class MetricsCollector:
    """Collector for business metrics."""

    @staticmethod
    def record_request(method: str, endpoint: str, status_code: int, duration_seconds: float):
        """Record an HTTP request."""
        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration_seconds)

    @staticmethod
    def record_booking_created():
        """Record a booking creation."""
        BOOKINGS_CREATED.inc()

    @staticmethod
    def record_transition(action: str, status: str):
        """Record an applied status transition."""
        BOOKING_TRANSITIONS.labels(action=action, status=status).inc()

    @staticmethod
    def record_transition_rejected(action: str, reason: str):
        """Record a refused status transition."""
        BOOKING_TRANSITIONS_REJECTED.labels(action=action, reason=reason).inc()

    @staticmethod
    def record_route_search(direct_count: int, transit_count: int):
        """Record an itinerary search and its result sizes."""
        ROUTE_SEARCHES.inc()
        ROUTES_RETURNED.labels(kind="direct").observe(direct_count)
        ROUTES_RETURNED.labels(kind="transit").observe(transit_count)


def get_prometheus_metrics():
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()
