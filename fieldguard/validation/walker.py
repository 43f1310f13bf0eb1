# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Field enumeration for validatable instances."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from ..metadata import registry
from .base import FieldSpec, TypeMetadata


class FieldWalker:
    """Yield the fields of a validatable instance: own fields first, then
    public fields inherited from its ancestors, each in declaration order.
    """

    def metadata_for(self, instance) -> Optional[TypeMetadata]:
        return registry.get_metadata(type(instance))

    def field_sets(self, instance) -> Tuple[Tuple[FieldSpec, ...], Tuple[FieldSpec, ...]]:
        metadata = self.metadata_for(instance)
        if metadata is None:
            return (), ()
        return metadata.own_fields, metadata.inherited_fields

    def walk(self, instance) -> Iterator[FieldSpec]:
        own, inherited = self.field_sets(instance)
        yield from own
        yield from inherited


__all__ = ["FieldWalker"]
