# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for fieldguard."""

from __future__ import annotations

import time
from typing import Optional

from .runtime import meter

validation_total = meter.create_counter(
    name="fieldguard.validation.total",
    description="Counts validated calls partitioned by outcome (passed/rejected/error).",
    unit="1",
)

validation_rejected_total = meter.create_counter(
    name="fieldguard.validation.rejected.total",
    description="Counts rejected calls partitioned by the violated constraint kind.",
    unit="1",
)

validation_latency_ms = meter.create_histogram(
    name="fieldguard.validation.latency.ms",
    description="Time spent validating the arguments of a single call.",
    unit="ms",
)


def record_validation_metrics(
    target: str,
    status: str,
    started_at: float,
    *,
    kind: Optional[str] = None,
) -> float:
    """Record latency and outcome for one validated call; return the duration in ms.

    Args:
        target: Qualified name of the guarded callable.
        status: ``"passed"``, ``"rejected"`` or ``"error"``.
        started_at: Timestamp from ``time.perf_counter()`` taken before validation.
        kind: Violated constraint kind, for rejections.
    """

    duration_ms = (time.perf_counter() - started_at) * 1000.0
    validation_latency_ms.record(duration_ms, {"target": target, "status": status})
    validation_total.add(1, {"target": target, "status": status})
    if kind is not None:
        validation_rejected_total.add(1, {"target": target, "kind": kind})
    return duration_ms


__all__ = [
    "record_validation_metrics",
    "validation_latency_ms",
    "validation_rejected_total",
    "validation_total",
]
