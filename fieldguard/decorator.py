# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

# fieldguard/decorator.py

import asyncio
import concurrent.futures as _cf
import contextvars as _ctxvars
import functools
import inspect
import logging
from typing import Any, Callable, Optional, Union

import anyio

from .exceptions import ValidationFailure
from .runtime import validate_arguments

logger = logging.getLogger(__name__)

# Sentinel object to detect if a parameter was provided by the user
_sentinel = object()


def _accepts_error(handler: Callable) -> bool:
    """Whether *handler* can be called with the rejection error as its only argument."""

    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); pass the error.
        return True
    try:
        signature.bind(object())
    except TypeError:
        return False
    return True


def validated(
    func: Optional[Union[Callable, str]] = None,
    *,
    target: Optional[str] = None,
    on_reject: Any = _sentinel,
):
    """
    Validate a callable's validatable arguments before its body runs.

    Every bound argument (defaults included, in parameter order) whose exact
    type was registered with ``@validatable`` is walked field by field. The
    first violated constraint aborts the call with a ``ValidationFailure``.

    :param target: Optional. Name used in logs, spans and metrics. Defaults to
                   the function's module and qualified name.
    :param on_reject: Optional. Determines the behavior on rejection. A
                      callable is invoked (with the ``ValidationFailure`` if it
                      accepts an argument) and its result returned; any other
                      value is returned directly. If not provided, the
                      ``ValidationFailure`` is raised.

    .. code-block:: python

        from typing import Annotated
        from fieldguard import Required, Length, validatable, validated

        @validatable
        class CreateUser:
            name: Annotated[str, Required(), Length(max=32)]

            def __init__(self, name):
                self.name = name

        # Option 1: Raise (the default)
        @validated
        def create_user(form: CreateUser): ...

        # Option 2: Map the failure to a response
        @validated(on_reject=lambda error: {"error": error.to_dict()})
        def create_user_api(form: CreateUser): ...
    """

    def decorator(fn: Callable):
        effective_target = target
        if effective_target is None:
            effective_target = f"{fn.__module__}.{fn.__qualname__}"

        signature = inspect.signature(fn)

        def _bound_values(args, kwargs):
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            values = []
            for name, value in bound.arguments.items():
                kind = signature.parameters[name].kind
                if kind is inspect.Parameter.VAR_POSITIONAL:
                    values.extend(value)
                elif kind is inspect.Parameter.VAR_KEYWORD:
                    values.extend(value.values())
                else:
                    values.append(value)
            return values

        @functools.wraps(fn)
        def sync_wrapper(*args, **kwargs):
            """Wrapper for synchronous functions."""
            try:
                validate_arguments(_bound_values(args, kwargs), target=effective_target)
            except ValidationFailure as error:
                return _handle_rejection_sync(error)
            return fn(*args, **kwargs)

        @functools.wraps(fn)
        async def async_wrapper(*args, **kwargs):
            """Wrapper for asynchronous functions."""
            try:
                validate_arguments(_bound_values(args, kwargs), target=effective_target)
            except ValidationFailure as error:
                return await _handle_rejection(error)
            return await fn(*args, **kwargs)

        handler_takes_error = callable(on_reject) and _accepts_error(on_reject)

        def _call_handler(error: ValidationFailure):
            if handler_takes_error:
                return on_reject(error)
            return on_reject()

        async def _handle_rejection(error: ValidationFailure):
            """Executes the user-supplied `on_reject` handler or raises by default."""

            if on_reject is _sentinel:
                raise error

            if not callable(on_reject):
                return on_reject

            result = _call_handler(error)
            if inspect.isawaitable(result):
                result = await result
            return result

        def _handle_rejection_sync(error: ValidationFailure):
            if on_reject is _sentinel:
                raise error

            if not callable(on_reject):
                return on_reject

            if not inspect.iscoroutinefunction(on_reject):
                return _call_handler(error)

            # Async handler guarding a sync function: drive it to completion.
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                return anyio.run(_handle_rejection, error)

            # A loop is running in this thread; run the handler on a worker
            # thread with a private loop, keeping contextvars.
            _ctx = _ctxvars.copy_context()
            with _cf.ThreadPoolExecutor(max_workers=1) as _exec:
                _future = _exec.submit(lambda: _ctx.run(anyio.run, _handle_rejection, error))
                return _future.result()

        if inspect.iscoroutinefunction(fn):
            wrapper = async_wrapper
        else:
            wrapper = sync_wrapper

        wrapper.__fieldguard_validated__ = True
        wrapper.__fieldguard_target__ = effective_target
        return wrapper

    # Dual syntax: @validated vs @validated(...) / @validated("target.name")
    if callable(func):
        return decorator(func)
    if isinstance(func, str):
        target = func
    return decorator


__all__ = ["validated"]
