# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint metadata model.

Constraints are immutable markers attached to fields, usually through
``typing.Annotated``::

    @validatable
    class SignupForm:
        name: Annotated[str, Required()]
        code: Annotated[str, Pattern(r"^[A-Z]{3}$")]
        nickname: Annotated[str, Length(min=2, max=16, message="bad nickname")]

Each constraint carries a :class:`ConstraintKind` tag so the evaluator can
dispatch on it directly. An empty ``message`` means "use the default".
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

from ..exceptions import ConfigurationError

UNBOUNDED: int = sys.maxsize
"""Sentinel for an unset ``Length.max``."""


class ConstraintKind(str, Enum):
    REQUIRED = "required"
    PATTERN = "pattern"
    NON_ZERO = "non_zero"
    LENGTH = "length"


class LengthMode(str, Enum):
    EXACT = "exact"
    MIN = "min"
    MAX = "max"
    RANGE = "range"


@dataclass(frozen=True)
class Required:
    """Value must not be ``None`` or the empty string."""

    message: str = ""
    kind: ConstraintKind = field(default=ConstraintKind.REQUIRED, init=False)


@dataclass(frozen=True)
class Pattern:
    """String form of the value must fully match a regular expression.

    The expression may be passed as ``regexp`` or ``value``; ``regexp`` wins
    when both are given.
    """

    regexp: Optional[str] = None
    value: Optional[str] = None
    message: str = ""
    kind: ConstraintKind = field(default=ConstraintKind.PATTERN, init=False)
    compiled: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        expression = self.expression
        if not expression:
            raise ConfigurationError("Pattern constraint requires 'regexp' or 'value'")
        try:
            object.__setattr__(self, "compiled", re.compile(expression))
        except re.error as exc:
            raise ConfigurationError(f"Invalid pattern {expression!r}: {exc}") from exc

    @property
    def expression(self) -> Optional[str]:
        return self.regexp if self.regexp else self.value


@dataclass(frozen=True)
class NonZero:
    """String form of a present value must not be exactly ``"0"``."""

    message: str = ""
    kind: ConstraintKind = field(default=ConstraintKind.NON_ZERO, init=False)


@dataclass(frozen=True)
class Length:
    """Length bounds on the string form of a value.

    ``exact`` (when non-zero) takes precedence over ``min``/``max``. An unset
    ``min`` is ``0`` and an unset ``max`` is :data:`UNBOUNDED`.
    """

    exact: int = 0
    min: int = 0
    max: int = UNBOUNDED
    message: str = ""
    kind: ConstraintKind = field(default=ConstraintKind.LENGTH, init=False)

    def __post_init__(self) -> None:
        for name in ("exact", "min", "max"):
            bound = getattr(self, name)
            if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
                raise ConfigurationError(
                    f"Length.{name} must be a non-negative integer, got {bound!r}"
                )
        if self.min > self.max:
            raise ConfigurationError(
                f"Length.min ({self.min}) must not exceed Length.max ({self.max})"
            )

    @property
    def mode(self) -> LengthMode:
        if self.exact != 0:
            return LengthMode.EXACT
        if self.min != 0 and self.max == UNBOUNDED:
            return LengthMode.MIN
        if self.min == 0 and self.max != UNBOUNDED:
            return LengthMode.MAX
        return LengthMode.RANGE


Constraint = Union[Required, Pattern, NonZero, Length]
CONSTRAINT_TYPES = (Required, Pattern, NonZero, Length)

_KIND_ALIASES: Mapping[str, type] = {
    "required": Required,
    "not_null": Required,
    "pattern": Pattern,
    "non_zero": NonZero,
    "not_zero": NonZero,
    "length": Length,
}


def is_constraint(obj: Any) -> bool:
    return isinstance(obj, CONSTRAINT_TYPES)


def constraint_from_mapping(spec: Any) -> Constraint:
    """Build a constraint from its declarative form.

    Accepts ``"required"`` style scalars or single-key mappings such as
    ``{"length": {"min": 2, "max": 8}}``. ``Length`` also accepts ``value``
    as an alias of ``exact``.
    """

    if isinstance(spec, str):
        name, params = spec, {}
    elif isinstance(spec, Mapping) and len(spec) == 1:
        name, params = next(iter(spec.items()))
        params = {} if params is None else params
    else:
        raise ConfigurationError(f"Unsupported constraint declaration: {spec!r}")

    factory = _KIND_ALIASES.get(str(name).lower())
    if factory is None:
        raise ConfigurationError(f"Unknown constraint kind {name!r}")

    if factory is Pattern and isinstance(params, str):
        params = {"regexp": params}
    if not isinstance(params, Mapping):
        raise ConfigurationError(f"Parameters for {name!r} must be a mapping, got {params!r}")

    params = dict(params)
    if factory is Length and "value" in params:
        if "exact" in params:
            raise ConfigurationError("Length accepts either 'exact' or 'value', not both")
        params["exact"] = params.pop("value")
    if params.get("message") is None:
        params.pop("message", None)

    try:
        return factory(**params)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid parameters for {name!r}: {exc}") from exc


__all__ = [
    "CONSTRAINT_TYPES",
    "Constraint",
    "ConstraintKind",
    "Length",
    "LengthMode",
    "NonZero",
    "Pattern",
    "Required",
    "UNBOUNDED",
    "constraint_from_mapping",
    "is_constraint",
]
