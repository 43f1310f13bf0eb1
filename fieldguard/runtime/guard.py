# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Run one validation pass for a guarded call, with timing and telemetry."""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, Optional

from ..config import load_settings
from ..exceptions import ValidationFailure
from ..telemetry import get_tracer, record_validation_metrics
from ..validation import ArgumentValidator
from .input_validation import format_validation_reason, get_argument_validator

logger = logging.getLogger(__name__)


def validate_arguments(
    arguments: Iterable[Any],
    *,
    target: str = "<call>",
    validator: Optional[ArgumentValidator] = None,
) -> None:
    """Validate a call's arguments in order, raising on the first violation.

    The elapsed time is measured in this call's own scope and reported
    whether the call passes, is rejected, or hits a configuration error.

    Raises:
        ValidationFailure: a declared constraint was violated.
        ConfigurationError: a validatable type is misconfigured.
    """

    validator = validator or get_argument_validator()
    started_at = time.perf_counter()
    status = "passed"
    kind = None

    with get_tracer().start_as_current_span(
        f"fieldguard.validate:{target}",
        attributes={"fieldguard.target": target},
    ) as span:
        try:
            validator.validate(arguments)
        except ValidationFailure as error:
            status = "rejected"
            if error.violation is not None:
                kind = error.violation.kind.value
            span.set_attribute("fieldguard.rejected", True)
            logger.debug("%s", format_validation_reason(target, error))
            raise
        except Exception:
            status = "error"
            raise
        finally:
            duration_ms = record_validation_metrics(target, status, started_at, kind=kind)
            if load_settings().timing_log:
                logger.info("validation of %s took %.3f ms (%s)", target, duration_ms, status)


__all__ = ["validate_arguments"]
