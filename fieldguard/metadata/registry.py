# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Registration-time metadata table for validatable types.

Registering a type walks its annotations once and records, per field, the
constraints found in ``typing.Annotated`` metadata plus any constraints
declared for it programmatically or in a constraint file. Validation time
lookups are plain dictionary access.

Constraints declared for a type are also inherited by registered subclasses
for its public fields. Registering (or unregistering) a type rebuilds the
tables of every registered subclass, so registration order does not matter.
"""

from __future__ import annotations

import builtins
import inspect
import logging
import sys
import threading
from typing import (
    Annotated,
    Any,
    ClassVar,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    get_origin,
)

from ..exceptions import ConfigurationError
from ..validation.base import FieldSpec, TypeMetadata
from ..validation.constraints import Constraint, is_constraint

logger = logging.getLogger(__name__)

_REGISTRY: Dict[type, TypeMetadata] = {}
_DECLARED: Dict[type, Dict[str, Tuple[Constraint, ...]]] = {}
_LOCK = threading.Lock()


class _Unresolved:
    """Stand-in for a name that is not defined yet when a class is registered."""

    def __init__(self, name: str):
        self.__forward_arg__ = name

    def __call__(self, *args, **kwargs):
        return self

    def __getattr__(self, name: str):
        if name.startswith("__"):
            raise AttributeError(name)
        return self

    def __getitem__(self, item):
        return self

    def __or__(self, other):
        return self

    __ror__ = __or__

    def __repr__(self) -> str:
        return f"<unresolved {self.__forward_arg__}>"


class _LenientNamespace(dict):
    """Class namespace for evaluating string annotations.

    Names missing from the class, its module and builtins evaluate to
    :class:`_Unresolved` so forward references do not block registration.
    """

    def __init__(self, namespace: Mapping[str, Any], module_globals: Mapping[str, Any]):
        super().__init__(namespace)
        self._module_globals = module_globals

    def __missing__(self, key: str):
        if key in self._module_globals or hasattr(builtins, key):
            raise KeyError(key)
        return _Unresolved(key)


def _evaluate(klass: type, name: str, hint: Any) -> Any:
    if not isinstance(hint, str):
        return hint
    module = sys.modules.get(klass.__module__)
    module_globals = dict(vars(module)) if module is not None else {}
    try:
        return eval(hint, module_globals, _LenientNamespace(vars(klass), module_globals))  # noqa: S307
    except Exception as exc:
        logger.error("Cannot evaluate annotation of %s.%s: %s", klass.__qualname__, name, exc)
        raise ConfigurationError(
            f"Cannot evaluate annotation of {klass.__module__}.{klass.__qualname__}.{name}"
            f" ({hint!r}): {exc}"
        ) from exc


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        raw = dict(inspect.get_annotations(klass))
    except Exception as exc:
        logger.error("Cannot read annotations of %s: %s", klass.__qualname__, exc)
        raise ConfigurationError(
            f"Cannot read annotations of {klass.__module__}.{klass.__qualname__}: {exc}"
        ) from exc
    return {name: _evaluate(klass, name, hint) for name, hint in raw.items()}


def _constraints_of(hint: Any) -> Tuple[Constraint, ...]:
    if get_origin(hint) is Annotated:
        return tuple(item for item in hint.__metadata__ if is_constraint(item))
    return ()


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def _field_specs(klass: type, *, public_only: bool, skip: Iterable[str] = ()) -> List[FieldSpec]:
    skipped = set(skip)
    specs = []
    for name, hint in _own_annotations(klass).items():
        if name in skipped or _is_class_var(hint):
            continue
        if public_only and name.startswith("_"):
            continue
        specs.append(FieldSpec(name=name, constraints=_constraints_of(hint), owner=klass))
    return specs


def _normalize(
    klass: type,
    fields: Optional[Mapping[str, Sequence[Constraint]]],
) -> Dict[str, Tuple[Constraint, ...]]:
    declared = {}
    for name, extra in (fields or {}).items():
        extra = tuple(extra)
        bad = [item for item in extra if not is_constraint(item)]
        if bad:
            raise ConfigurationError(f"Field '{name}' of {klass.__qualname__}: not constraints: {bad!r}")
        declared[str(name)] = extra
    return declared


def _append(table: List[FieldSpec], name: str, extra: Tuple[Constraint, ...]) -> bool:
    for index, spec in enumerate(table):
        if spec.name == name:
            table[index] = FieldSpec(spec.name, spec.constraints + extra, spec.owner)
            return True
    return False


def build_metadata(
    klass: type,
    fields: Optional[Mapping[str, Sequence[Constraint]]] = None,
) -> TypeMetadata:
    """Compute the field table for *klass* without registering it.

    *fields* appends extra constraints per field name; names that are not
    annotated anywhere become additional own fields. Constraints declared
    for registered ancestors are merged into the inherited public fields.
    """

    own = _field_specs(klass, public_only=False)
    own_names = {spec.name for spec in own}
    seen = set(own_names)

    inherited: List[FieldSpec] = []
    ancestors = [base for base in klass.__mro__[1:] if base is not object]
    for base in ancestors:
        specs = _field_specs(base, public_only=True, skip=seen)
        seen.update(spec.name for spec in specs)
        inherited.extend(specs)

    # Farthest ancestor first, so nearer declarations come later.
    for base in reversed(ancestors):
        for name, extra in _DECLARED.get(base, {}).items():
            if name.startswith("_") or name in own_names:
                continue
            if not _append(inherited, name, extra):
                inherited.append(FieldSpec(name=name, constraints=extra, owner=base))

    for name, extra in _normalize(klass, fields).items():
        if not (_append(own, name, extra) or _append(inherited, name, extra)):
            own.append(FieldSpec(name=name, constraints=extra, owner=klass))

    return TypeMetadata(type=klass, own_fields=tuple(own), inherited_fields=tuple(inherited))


def _rebuild_subclasses(klass: type) -> None:
    for registered in list(_REGISTRY):
        if registered is not klass and klass in registered.__mro__[1:]:
            _REGISTRY[registered] = build_metadata(registered, _DECLARED.get(registered))
            logger.debug("Rebuilt %s after %s changed", registered.__qualname__, klass.__qualname__)


def register(
    klass: type,
    fields: Optional[Mapping[str, Sequence[Constraint]]] = None,
) -> TypeMetadata:
    """Mark *klass* validatable and record its field table (replacing any previous one)."""

    if not isinstance(klass, type):
        raise ConfigurationError(f"Only classes can be registered, got {klass!r}")

    declared = _normalize(klass, fields)
    metadata = build_metadata(klass, declared)
    with _LOCK:
        if declared:
            _DECLARED[klass] = declared
        else:
            _DECLARED.pop(klass, None)
        _REGISTRY[klass] = metadata
        _rebuild_subclasses(klass)
    logger.debug(
        "Registered %s with %d own and %d inherited fields",
        klass.__qualname__,
        len(metadata.own_fields),
        len(metadata.inherited_fields),
    )
    return metadata


def validatable(klass: Optional[type] = None, /):
    """Class decorator marking a type's instances for field validation.

    Usable as ``@validatable`` or ``@validatable()``. The marker applies to
    the decorated class only; subclasses must be decorated themselves.
    """

    def decorator(cls: type) -> type:
        register(cls)
        return cls

    if klass is None:
        return decorator
    return decorator(klass)


def unregister(klass: type) -> None:
    with _LOCK:
        _REGISTRY.pop(klass, None)
        if _DECLARED.pop(klass, None):
            _rebuild_subclasses(klass)


def clear() -> None:
    """Forget every registered type."""

    with _LOCK:
        _REGISTRY.clear()
        _DECLARED.clear()


def get_metadata(klass: type) -> Optional[TypeMetadata]:
    return _REGISTRY.get(klass)


def is_validatable(obj: Any) -> bool:
    """Return True when *obj* (or its exact type, for instances) is registered."""

    klass = obj if isinstance(obj, type) else type(obj)
    return klass in _REGISTRY


def registered_types() -> Tuple[type, ...]:
    return tuple(_REGISTRY)


__all__ = [
    "build_metadata",
    "clear",
    "get_metadata",
    "is_validatable",
    "register",
    "registered_types",
    "unregister",
    "validatable",
]
