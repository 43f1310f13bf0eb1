# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""fieldguard - declarative per-field constraint validation at call boundaries."""

from .exceptions import (
    ConfigurationError,
    ErrorCode,
    FieldGuardError,
    MetadataAccessFailure,
    ValidationFailure,
)
from .validation import (
    UNBOUNDED,
    ArgumentValidator,
    Length,
    NonZero,
    Pattern,
    Required,
    ValidationViolation,
)
from .metadata import (
    is_validatable,
    load_constraint_file,
    register,
    validatable,
)
from .runtime import validate_arguments
from .decorator import validated
from .scanning import guard_module

__version__ = "0.1.0"

__all__ = [
    "ArgumentValidator",
    "ConfigurationError",
    "ErrorCode",
    "FieldGuardError",
    "Length",
    "MetadataAccessFailure",
    "NonZero",
    "Pattern",
    "Required",
    "UNBOUNDED",
    "ValidationFailure",
    "ValidationViolation",
    "guard_module",
    "is_validatable",
    "load_constraint_file",
    "register",
    "validatable",
    "validate_arguments",
    "validated",
]
