# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Argument-level orchestration: find validatable arguments and check them."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..exceptions import ErrorCode, ValidationFailure
from .accessor import read_field_value
from .base import ValidationViolation
from .evaluator import ConstraintEvaluator
from .walker import FieldWalker

logger = logging.getLogger(__name__)


class ArgumentValidator:
    """Fail-fast validator over a call's argument list.

    Arguments are scanned in call order. Only instances whose exact type is
    registered as validatable are walked; the first violated constraint ends
    the scan.
    """

    def __init__(
        self,
        *,
        walker: Optional[FieldWalker] = None,
        evaluator: Optional[ConstraintEvaluator] = None,
    ):
        self.walker = walker or FieldWalker()
        self.evaluator = evaluator or ConstraintEvaluator()

    def check_instance(self, instance: Any) -> Optional[ValidationViolation]:
        for spec in self.walker.walk(instance):
            if not spec.has_constraints:
                continue
            value = read_field_value(spec, instance)
            violation = self.evaluator.first_violation(spec, value)
            if violation is not None:
                return violation
        return None

    def check(self, arguments: Iterable[Any]) -> Optional[ValidationViolation]:
        """Return the first violation across *arguments*, or ``None``."""

        for argument in arguments:
            if self.walker.metadata_for(argument) is None:
                continue
            violation = self.check_instance(argument)
            if violation is not None:
                logger.debug(
                    "Argument of type %s failed %s on field '%s'",
                    type(argument).__qualname__,
                    violation.kind.value,
                    violation.field,
                )
                return violation
        return None

    def validate(self, arguments: Iterable[Any]) -> None:
        """Raise :class:`ValidationFailure` for the first violated constraint."""

        violation = self.check(arguments)
        if violation is not None:
            raise ValidationFailure(
                violation.message,
                code=ErrorCode.SYSTEM_ERROR,
                violation=violation,
            )


__all__ = ["ArgumentValidator"]
