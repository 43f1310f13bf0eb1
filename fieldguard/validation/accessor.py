# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Read field values through a type's accessor convention."""

from __future__ import annotations

from typing import Any

from ..exceptions import MetadataAccessFailure
from .base import FieldSpec


def getter_name(field: str) -> str:
    return f"get_{field.lstrip('_')}"


def read_field_value(spec: FieldSpec, instance: Any) -> Any:
    """Return the current value of *spec* on *instance*.

    A callable ``get_<name>`` defined on the type is preferred; otherwise the
    attribute (or property) is read. Setters are never required.

    Raises:
        MetadataAccessFailure: no accessor exists or invoking it failed.
    """

    owner = type(instance)
    getter = getattr(owner, getter_name(spec.name), None)
    try:
        if callable(getter):
            return getter(instance)
        return getattr(instance, spec.name)
    except AttributeError as exc:
        raise MetadataAccessFailure(owner, spec.name, f"no readable accessor ({exc})") from exc
    except TypeError as exc:
        raise MetadataAccessFailure(owner, spec.name, f"accessor cannot be invoked ({exc})") from exc


__all__ = ["getter_name", "read_field_value"]
