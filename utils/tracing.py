"""
OpenTelemetry tracing.

Services always create spans through ``get_tracer``. Until ``setup_tracing``
installs an SDK provider the API hands out no-op spans, so tracing costs
nothing when it is switched off.
"""

import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

logger = logging.getLogger(__name__)

_initialized = False


def setup_tracing(service_name: str = "insightmart-backend", enable: bool = True) -> None:
    """
    Install the SDK tracer provider and instrument Django.

    Spans are written by a console exporter; point an OpenTelemetry collector
    at the process output to ship them elsewhere.

    Args:
        service_name: Name reported on every span
        enable: Enable/disable tracing
    """
    global _initialized

    if _initialized:
        logger.warning("Tracing already initialized. Skipping.")
        return

    if not enable:
        logger.info("Tracing disabled via configuration")
        return

    resource = Resource(attributes={SERVICE_NAME: service_name})
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(tracer_provider)

    DjangoInstrumentor().instrument()
    logger.info("Django auto-instrumentation enabled")

    _initialized = True
    logger.info(f"OpenTelemetry tracing initialized for service: {service_name}")


def get_tracer(name: str = "insightmart") -> trace.Tracer:
    """
    Get tracer instance for creating custom spans.

    Example:
        tracer = get_tracer(__name__)

        with tracer.start_as_current_span("place_order"):
            ...
    """
    return trace.get_tracer(name)


def add_span_attributes(span: Optional[trace.Span], **attributes) -> None:
    """Set every keyword as a string attribute on ``span``."""
    if span is None:
        return
    for key, value in attributes.items():
        span.set_attribute(key, str(value))
