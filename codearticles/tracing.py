"""
OpenTelemetry Tracing — tracing.py
==================================
Provides TracingConfig, configure_tracing(), get_tracer(), and three
context-manager helpers for the main instrumentation points: a page render,
a source fetch, and a clipboard copy.

Until configure_tracing() installs an SDK provider, spans come from the
OpenTelemetry API's built-in no-op tracer.

Usage:
    from codearticles.tracing import configure_tracing, TracingConfig
    configure_tracing(TracingConfig(enabled=True, otlp_endpoint="http://localhost:4317"))
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from opentelemetry import trace

logger = logging.getLogger("codearticles.tracing")

_tracer: Optional[trace.Tracer] = None
_provider = None


@dataclass
class TracingConfig:
    enabled: bool = False
    service_name: str = "codearticles"
    otlp_endpoint: Optional[str] = None   # None → ConsoleSpanExporter (dev)
    sample_rate: float = 1.0


def configure_tracing(cfg: TracingConfig) -> None:
    """Initialise the global tracer. Safe to call multiple times."""
    global _tracer, _provider

    if not cfg.enabled:
        _tracer = trace.get_tracer(__name__)
        return

    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

    resource = Resource.create({"service.name": cfg.service_name})
    provider = TracerProvider(resource=resource, sampler=TraceIdRatioBased(cfg.sample_rate))

    if cfg.otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
        exporter = OTLPSpanExporter(endpoint=cfg.otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("OTEL tracing → %s", cfg.otlp_endpoint)
    else:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        logger.info("OTEL tracing → console (dev mode)")

    _provider = provider
    _tracer = provider.get_tracer(cfg.service_name)


def get_tracer() -> trace.Tracer:
    """Return the configured tracer (the API default if configure_tracing() was not called)."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(__name__)
    return _tracer


def reset_tracing() -> None:
    """Drop the configured tracer; used by tests."""
    global _tracer, _provider
    if _provider is not None:
        _provider.shutdown()
    _tracer = None
    _provider = None


# ── Context managers ───────────────────────────────────────────────────────────

@contextmanager
def traced_render(mode: str) -> Iterator:
    """Span for one page render (list or detail)."""
    with get_tracer().start_as_current_span(f"render:{mode}") as span:
        span.set_attribute("render.mode", mode)
        yield span


@contextmanager
def traced_fetch(kind: str, key: str) -> Iterator:
    """Span for a catalog or content source call."""
    with get_tracer().start_as_current_span(f"fetch:{kind}") as span:
        span.set_attribute("fetch.kind", kind)
        span.set_attribute("fetch.key", key)
        yield span


@contextmanager
def traced_copy(length: int) -> Iterator:
    """Span for a clipboard write."""
    with get_tracer().start_as_current_span("clipboard_copy") as span:
        span.set_attribute("clipboard.length", length)
        yield span
