"""Logging and OpenTelemetry setup."""

import logging
from typing import TYPE_CHECKING

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio

from src.infrastructure.observability.structlog_processor import (
    add_trace_context,
    redact_secrets,
)

if TYPE_CHECKING:
    from fastapi import FastAPI

    from src.config import Settings

# Module-level state for cleanup
_tracer_provider: TracerProvider | None = None
_initialized: bool = False


def init_observability(settings: "Settings", *, app: "FastAPI | None" = None) -> None:
    """Configure structured logging and, when enabled, OpenTelemetry tracing.

    Logging is always configured. Tracing follows the ``otel_*`` settings:
    spans go to an OTLP collector and/or the console, and the FastAPI app is
    instrumented so each request opens a server span.

    Args:
        settings: Application settings.
        app: Optional FastAPI app instance to instrument.
    """
    global _tracer_provider, _initialized

    if _initialized:
        return

    configure_logging(debug=settings.debug)

    # Without a provider the API default proxy stays a no-op
    if not settings.otel_enabled:
        _initialized = True
        return

    resource = Resource.create(
        {
            SERVICE_NAME: settings.app_name,
            SERVICE_VERSION: settings.app_version,
        }
    )
    _tracer_provider = TracerProvider(
        resource=resource,
        sampler=ParentBasedTraceIdRatio(settings.otel_sample_rate),
    )

    if settings.otel_console_export:
        _tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if settings.otel_endpoint:
        exporter = OTLPSpanExporter(endpoint=f"{settings.otel_endpoint}/v1/traces")
        _tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(_tracer_provider)

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)

    _initialized = True


def shutdown_observability() -> None:
    """Flush pending spans and shut down the tracer provider."""
    global _tracer_provider, _initialized

    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        _tracer_provider = None

    _initialized = False


def configure_logging(*, debug: bool = False) -> None:
    """Configure structlog on top of the standard library logging module.

    Events carry the trace context when a span is active, and credential
    fields are masked before rendering. Debug mode renders for the console;
    otherwise events are emitted as JSON lines.

    Args:
        debug: Use human-readable console output and DEBUG level.
    """
    renderer: structlog.types.Processor = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            add_trace_context,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )
