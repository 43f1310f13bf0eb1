"""Validation package - constraint model, field walk and evaluation.

Pure checking only: nothing here transforms values or performs I/O.
"""

from .arguments import ArgumentValidator
from .base import FieldSpec, TypeMetadata, ValidationViolation
from .constraints import (
    UNBOUNDED,
    Constraint,
    ConstraintKind,
    Length,
    LengthMode,
    NonZero,
    Pattern,
    Required,
    constraint_from_mapping,
)
from .evaluator import ConstraintEvaluator
from .walker import FieldWalker

__all__ = [
    "ArgumentValidator",
    "Constraint",
    "ConstraintEvaluator",
    "ConstraintKind",
    "FieldSpec",
    "FieldWalker",
    "Length",
    "LengthMode",
    "NonZero",
    "Pattern",
    "Required",
    "TypeMetadata",
    "UNBOUNDED",
    "ValidationViolation",
    "constraint_from_mapping",
]
