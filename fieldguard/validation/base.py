# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Core data structures shared by the walker, evaluator and orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from ..exceptions import ConfigurationError
from .constraints import Constraint, ConstraintKind


@dataclass(frozen=True)
class FieldSpec:
    """A field of a validatable type and its constraints in declaration order."""

    name: str
    constraints: Tuple[Constraint, ...] = ()
    owner: type = field(default=object, compare=False)

    @property
    def has_constraints(self) -> bool:
        return bool(self.constraints)


@dataclass(frozen=True)
class TypeMetadata:
    """Registration-time metadata for one validatable type."""

    type: type
    own_fields: Tuple[FieldSpec, ...] = ()
    inherited_fields: Tuple[FieldSpec, ...] = ()

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.own_fields + self.inherited_fields:
            if spec.name == name:
                return spec
        raise ConfigurationError(
            f"{self.type.__module__}.{self.type.__qualname__} has no validatable field '{name}'"
        )


@dataclass(frozen=True)
class ValidationViolation:
    """The outcome of one failed constraint."""

    field: str
    kind: ConstraintKind
    message: str
    owner: type = field(default=object, compare=False)


__all__ = ["FieldSpec", "TypeMetadata", "ValidationViolation"]
