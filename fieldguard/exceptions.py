# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for fieldguard."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .validation.base import ValidationViolation


class ErrorCode(str, Enum):
    """Machine-readable error codes carried by :class:`ValidationFailure`."""

    SYSTEM_ERROR = "SYSTEM_ERROR"


class FieldGuardError(Exception):
    """Base class for every error raised by fieldguard."""


class ConfigurationError(FieldGuardError):
    """A validatable type, constraint declaration or constraint file is misconfigured."""


class MetadataAccessFailure(ConfigurationError):
    """The value of a constrained field could not be read from an instance.

    This signals a misconfigured validatable type and is never treated as a
    validation outcome.
    """

    def __init__(self, owner: type, field: str, reason: str):
        self.owner = owner
        self.field = field
        self.reason = reason
        super().__init__(
            f"Cannot read field '{field}' of {owner.__module__}.{owner.__qualname__}: {reason}"
        )


class ValidationFailure(FieldGuardError):
    """Raised once per rejected call, describing exactly one violated constraint."""

    def __init__(
        self,
        description: str,
        *,
        code: ErrorCode = ErrorCode.SYSTEM_ERROR,
        violation: Optional["ValidationViolation"] = None,
    ):
        self.code = code
        self.description = description
        self.violation = violation
        super().__init__(description)

    @property
    def field(self) -> Optional[str]:
        return self.violation.field if self.violation else None

    def to_dict(self) -> dict:
        """Return the client-facing error payload."""

        return {"code": self.code.value, "description": self.description}

    def __repr__(self) -> str:
        return f"ValidationFailure(code={self.code.value!r}, description={self.description!r})"


__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "FieldGuardError",
    "MetadataAccessFailure",
    "ValidationFailure",
]
