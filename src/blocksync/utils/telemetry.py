"""Tracing for sync runs.

Spans are opened unconditionally through the OpenTelemetry API; they cost
nothing until :func:`configure_telemetry` installs an SDK provider, which
``blocksync sync --telemetry`` (or ``telemetry.enabled`` in the settings
file) does once per process.

Span names::

    blocksync.catalog.fetch     live listing or fallback
    blocksync.reconcile.plan    create / backfill / noop decision
    blocksync.reconcile.apply   writes and the commit
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from blocksync.config import TelemetrySettings

# Span attribute keys
ATTR_REGION = "blocksync.region"
ATTR_CATALOG_SOURCE = "blocksync.catalog.source"
ATTR_CATALOG_SIZE = "blocksync.catalog.size"
ATTR_BLOCKS_EXISTING = "blocksync.blocks.existing"
ATTR_MODE = "blocksync.mode"
ATTR_VERSION = "blocksync.version"
ATTR_MISSING = "blocksync.missing"
ATTR_SKIPPED = "blocksync.skipped"
ATTR_WRITTEN = "blocksync.written"
ATTR_FAILED = "blocksync.failed"
ATTR_COMMITTED = "blocksync.committed"

_INSTRUMENTATION_NAME = "blocksync"
_INSTALL_HINT = "Install it with: pip install blocksync[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*; a no-op tracer until telemetry is configured."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    settings: TelemetrySettings | None = None,
    *,
    service_name: str = "blocksync",
) -> None:
    """Install an SDK tracer provider for this process.

    Spans go to the OTLP endpoint of *settings* when one is set, otherwise
    they are printed as JSON on standard error so they never mix with the
    command output.

    Raises:
        ImportError: ``opentelemetry-sdk`` (or, for OTLP, the exporter
            package) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(f"opentelemetry-sdk is required for tracing. {_INSTALL_HINT}") from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    endpoint = settings.otlp_endpoint if settings is not None else None
    provider.add_span_processor(_span_processor(endpoint))
    trace.set_tracer_provider(provider)


def _span_processor(endpoint: str | None) -> Any:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    if not endpoint:
        return SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr))

    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(
            f"opentelemetry-exporter-otlp is required for OTLP export. {_INSTALL_HINT}"
        ) from exc
    return BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint))
