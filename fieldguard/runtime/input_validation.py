"""Runtime helpers for declarative argument validation."""

from __future__ import annotations

from typing import Final

from ..exceptions import ValidationFailure
from ..validation import ArgumentValidator


_VALIDATOR: Final[ArgumentValidator] = ArgumentValidator()


def get_argument_validator() -> ArgumentValidator:
    """Return the process-wide argument validator instance."""

    return _VALIDATOR


def format_validation_reason(target: str, error: ValidationFailure) -> str:
    """Produce a human-readable rejection reason for log lines."""

    field = error.field or "?"
    return f"Argument validation failed for '{target}' on field '{field}': {error.description}"


__all__ = [
    "format_validation_reason",
    "get_argument_validator",
]
