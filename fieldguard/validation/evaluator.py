# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint evaluation.

Each :class:`ConstraintKind` maps to exactly one rule. A rule returns the
default failure message when the value violates the constraint and ``None``
otherwise; the evaluator swaps in the constraint's custom message when one
is set.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional

from .base import FieldSpec, ValidationViolation
from .constraints import (
    Constraint,
    ConstraintKind,
    Length,
    LengthMode,
    NonZero,
    Pattern,
    Required,
)

Rule = Callable[[str, Any, Any], Optional[str]]


def is_blank(value: Any) -> bool:
    """``None`` and the empty string are the only blank values."""

    return value is None or (isinstance(value, str) and value == "")


def _check_required(field: str, value: Any, constraint: Required) -> Optional[str]:
    if is_blank(value):
        return f"{field} must not be empty"
    return None


def _check_pattern(field: str, value: Any, constraint: Pattern) -> Optional[str]:
    text = "" if value is None else str(value)
    if constraint.compiled.fullmatch(text) is None:
        return f"{field} does not match pattern [{constraint.expression}]"
    return None


def _check_non_zero(field: str, value: Any, constraint: NonZero) -> Optional[str]:
    if not is_blank(value) and str(value) == "0":
        return f"{field} must not be zero"
    return None


def _check_length(field: str, value: Any, constraint: Length) -> Optional[str]:
    # Blank values fail regardless of the configured mode.
    if is_blank(value):
        return "must not be empty"

    size = len(str(value))
    mode = constraint.mode
    if mode is LengthMode.EXACT:
        if size != constraint.exact:
            return f"length must equal {constraint.exact}"
    elif mode is LengthMode.MIN:
        if size < constraint.min:
            return f"minimum length is {constraint.min}"
    elif mode is LengthMode.MAX:
        if size > constraint.max:
            return f"maximum length is {constraint.max}"
    elif not constraint.min <= size <= constraint.max:
        return f"length must be within {constraint.min}~{constraint.max}"
    return None


_RULES: Dict[ConstraintKind, Rule] = {
    ConstraintKind.REQUIRED: _check_required,
    ConstraintKind.PATTERN: _check_pattern,
    ConstraintKind.NON_ZERO: _check_non_zero,
    ConstraintKind.LENGTH: _check_length,
}


class ConstraintEvaluator:
    """Evaluate constraints against field values."""

    def __init__(self, rules: Optional[Dict[ConstraintKind, Rule]] = None):
        self._rules = dict(_RULES if rules is None else rules)

    def evaluate(self, field: str, value: Any, constraint: Constraint) -> Optional[str]:
        """Return the resolved failure message, or ``None`` when *value* passes."""

        rule = self._rules[constraint.kind]
        default_message = rule(field, value, constraint)
        if default_message is None:
            return None
        return constraint.message or default_message

    def first_violation(
        self,
        spec: FieldSpec,
        value: Any,
        constraints: Optional[Iterable[Constraint]] = None,
    ) -> Optional[ValidationViolation]:
        """Check constraints in declaration order and stop at the first failure."""

        for constraint in spec.constraints if constraints is None else constraints:
            message = self.evaluate(spec.name, value, constraint)
            if message is not None:
                return ValidationViolation(
                    field=spec.name,
                    kind=constraint.kind,
                    message=message,
                    owner=spec.owner,
                )
        return None


__all__ = ["ConstraintEvaluator", "is_blank"]
