"""Runtime helpers used by the boundary decorator."""

from .guard import validate_arguments
from .input_validation import format_validation_reason, get_argument_validator

__all__ = [
    "format_validation_reason",
    "get_argument_validator",
    "validate_arguments",
]
