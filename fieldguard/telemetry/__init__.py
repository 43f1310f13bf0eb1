"""Telemetry package - OpenTelemetry meter, tracer and instruments."""

from .metrics import (
    record_validation_metrics,
    validation_latency_ms,
    validation_rejected_total,
    validation_total,
)
from .runtime import get_tracer, meter

__all__ = [
    "get_tracer",
    "meter",
    "record_validation_metrics",
    "validation_latency_ms",
    "validation_rejected_total",
    "validation_total",
]
