# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Module-level opt-in: guard every public callable of controller modules."""

from __future__ import annotations

import inspect
import logging
import re
from types import ModuleType
from typing import Any, List, Union

from .decorator import _sentinel, validated

logger = logging.getLogger(__name__)

# A top-level package ending in "control"/"controller" (``usercontroller.views``)
# or any later segment named exactly "control"/"controller" (``app.controller.users``).
CONTROLLER_PATTERN = re.compile(r"^\w*control(?:ler)?(?:\.|$)|\.control(?:ler)?(?:\.|$)")


def _is_guarded(obj: Any) -> bool:
    return getattr(obj, "__fieldguard_validated__", False) is True


def _defined_in(obj: Any, module: ModuleType) -> bool:
    return getattr(obj, "__module__", None) == module.__name__


def guard_module(
    module: ModuleType,
    *,
    pattern: Union[str, "re.Pattern[str]"] = CONTROLLER_PATTERN,
    on_reject: Any = _sentinel,
) -> List[str]:
    """Wrap public functions and public methods of *module* with ``validated``.

    Nothing happens unless the module's dotted name matches *pattern*. Only
    objects defined in the module itself are touched, and callables that are
    already guarded are left alone. Returns the qualified names wrapped.
    """

    matcher = re.compile(pattern) if isinstance(pattern, str) else pattern
    if not matcher.search(module.__name__):
        logger.debug("Module %s does not match %s; skipping", module.__name__, matcher.pattern)
        return []

    options = {} if on_reject is _sentinel else {"on_reject": on_reject}
    wrapped: List[str] = []

    for name, obj in list(vars(module).items()):
        if name.startswith("_") or not _defined_in(obj, module):
            continue
        if inspect.isfunction(obj):
            if not _is_guarded(obj):
                setattr(module, name, validated(obj, **options))
                wrapped.append(obj.__qualname__)
        elif inspect.isclass(obj):
            wrapped.extend(_guard_class(obj, options))

    logger.debug("Guarded %d callables in %s", len(wrapped), module.__name__)
    return wrapped


def _guard_class(klass: type, options: dict) -> List[str]:
    wrapped = []
    for name, attr in list(vars(klass).items()):
        if name.startswith("_"):
            continue
        if isinstance(attr, (staticmethod, classmethod)):
            inner = attr.__func__
            if _is_guarded(inner):
                continue
            setattr(klass, name, type(attr)(validated(inner, **options)))
            wrapped.append(inner.__qualname__)
        elif inspect.isfunction(attr) and not _is_guarded(attr):
            setattr(klass, name, validated(attr, **options))
            wrapped.append(attr.__qualname__)
    return wrapped


__all__ = ["CONTROLLER_PATTERN", "guard_module"]
