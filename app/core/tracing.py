"""
OpenTelemetry distributed tracing configuration.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from fastapi import FastAPI
from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio
from opentelemetry.trace import Span, SpanKind, Tracer

from app.core.config import settings

TRACER_NAME = "app.analytics"


def configure_tracer() -> TracerProvider:
    """
    Configure the OpenTelemetry tracer.

    This sets up the global tracer provider with sampling, a console
    exporter in development and an OTLP exporter when an endpoint is set.

    Returns:
        The configured tracer provider
    """
    resource = Resource.create(
        {
            "service.name": settings.SERVICE_NAME,
            "service.version": settings.VERSION,
            "deployment.environment": settings.ENVIRONMENT,
        }
    )

    tracer_provider = TracerProvider(
        resource=resource,
        sampler=ParentBasedTraceIdRatio(0.1),
    )

    if settings.ENVIRONMENT == "development":
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if settings.OTLP_ENDPOINT:
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT)))

    trace.set_tracer_provider(tracer_provider)

    return tracer_provider


def setup_tracing(app: FastAPI) -> None:
    """
    Set up OpenTelemetry tracing for the FastAPI application.

    Args:
        app: The FastAPI application to instrument
    """
    if not settings.ENABLE_TRACING:
        return

    try:
        tracer_provider = configure_tracer()

        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=tracer_provider,
            excluded_urls="health,metrics",
        )
        LoggingInstrumentor().instrument(tracer_provider=tracer_provider)

        logger.info("OpenTelemetry tracing configured successfully")
    except Exception as e:
        logger.error(f"Failed to setup OpenTelemetry tracing: {e}")


def get_tracer(name: str = TRACER_NAME) -> Tracer:
    """
    Get a tracer for creating spans.
    """
    return trace.get_tracer(name)


@contextmanager
def create_span(
    name: str, attributes: Optional[Dict[str, Any]] = None, kind: Optional[SpanKind] = None
) -> Generator[Span, None, None]:
    """
    Create a new span (context manager).

    Example usage:
        with create_span("analytics.export", {"donations": len(dataset)}) as span:
            payload = reports.export()
            span.add_event("export_composed")

    Args:
        name: The name of the span
        attributes: Optional attributes to add to the span
        kind: Optional span kind

    Returns:
        A span context manager
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(
        name, attributes=attributes, kind=kind if kind is not None else SpanKind.INTERNAL
    ) as span:
        yield span
