"""Decorators binding an InvocationConfig to functions, methods and classes."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, overload

from ..exceptions import LoggableConfigError
from ..models import CallSite, InvocationConfig, Level
from .defaults import get_instrumentor
from .instrumentor import Instrumentor, wrap_call

MARKER = "__loggable__"


@overload
def loggable(target: Callable[..., Any], /) -> Any: ...


@overload
def loggable(
    target: InvocationConfig | Level | None = None,
    /,
    *,
    instrumentor: Instrumentor | None = None,
    **fields: Any,
) -> Callable[[Any], Any]: ...


def loggable(
    target: Any = None,
    /,
    *,
    instrumentor: Instrumentor | None = None,
    **fields: Any,
) -> Any:
    """Log every call of a function, or of every public method of a class.

    Usable bare (``@loggable``), with a level (``@loggable(Level.DEBUG)``),
    with keyword settings (``@loggable(limit=2, unit="seconds")``) or with a
    prebuilt ``InvocationConfig``. Keyword settings override the fields of a
    given config.

    On a class, functions, static methods and class methods defined in the
    class body are wrapped unless their name starts with an underscore, so
    dunders such as ``__str__``, ``__eq__`` and ``__hash__`` never are.
    Methods carrying their own ``@loggable`` keep their own config, and
    inherited methods are left alone.
    """
    if target is not None and not isinstance(target, (InvocationConfig, Level)):
        return _apply(target, InvocationConfig(**fields), instrumentor)

    if isinstance(target, InvocationConfig):
        config = target
        if fields:
            merged = {**target.model_dump(exclude={"budget_ns"}), **fields}
            config = InvocationConfig.model_validate(merged)
    elif isinstance(target, Level):
        config = InvocationConfig(level=target, **fields)
    else:
        config = InvocationConfig(**fields)

    def decorator(obj: Any) -> Any:
        return _apply(obj, config, instrumentor)

    return decorator


def _apply(obj: Any, config: InvocationConfig, instrumentor: Instrumentor | None) -> Any:
    if inspect.isclass(obj):
        return _instrument_class(obj, config, instrumentor)
    if isinstance(obj, (staticmethod, classmethod)):
        return type(obj)(_instrument(obj.__func__, config, instrumentor))
    if not callable(obj):
        raise LoggableConfigError(f"@loggable cannot be applied to {obj!r}")
    return _instrument(obj, config, instrumentor)


def _instrument(
    func: Callable[..., Any],
    config: InvocationConfig,
    instrumentor: Instrumentor | None,
) -> Callable[..., Any]:
    resolve = (lambda: instrumentor) if instrumentor is not None else get_instrumentor
    wrapped = wrap_call(config, func, CallSite.of(func), resolve)
    setattr(wrapped, MARKER, config)
    return wrapped


def _instrument_class(cls: type, config: InvocationConfig, instrumentor: Instrumentor | None) -> type:
    for attr, member in list(vars(cls).items()):
        if attr.startswith("_"):
            continue
        if isinstance(member, (staticmethod, classmethod)):
            func = member.__func__
        elif inspect.isfunction(member):
            func = member
        else:
            continue
        if hasattr(func, MARKER):
            continue
        setattr(cls, attr, _apply(member, config, instrumentor))
    return cls
