"""loggable: log every call of a function with its arguments, result and duration.

Convenience API (delegates to a default Instrumentor):
    loggable.configure(...)    -> choose the sink and clock
    loggable.loggable(...)     -> decorator for functions, methods and classes
    loggable.wrap(config, fn)  -> explicit wrapping

DI API (construct your own Instrumentor):
    from loggable.core import Instrumentor
    from loggable.sinks import MemorySink
    instrumentor = Instrumentor(sink=MemorySink())
    logged = instrumentor.wrap(InvocationConfig(level=Level.DEBUG), fn)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ParamSpec, TypeVar

from .core import Instrumentor, get_instrumentor, loggable, set_instrumentor
from .core.instrumentor import Clock, wrap_call
from .exceptions import LoggableConfigError, LoggableError
from .models import CallSite, InvocationConfig, Level, TimeUnit
from .sinks import LogSink, MemorySink, StdlibSink

P = ParamSpec("P")
R = TypeVar("R")


def configure(*, sink: str | LogSink = "logging", clock: Clock | None = None) -> Instrumentor:
    """Configure and return the default global Instrumentor."""
    instrumentor = Instrumentor(sink=_resolve_sink(sink), clock=clock)
    set_instrumentor(instrumentor)
    return instrumentor


def wrap(
    config: InvocationConfig,
    func: Callable[P, R],
    call_site: CallSite | None = None,
) -> Callable[P, R]:
    """Wrap ``func`` with ``config`` using the default Instrumentor at call time."""
    if not callable(func):
        raise LoggableConfigError(f"Cannot instrument non-callable {func!r}")
    return wrap_call(config, func, call_site or CallSite.of(func), get_instrumentor)


def _reset_default_instrumentor() -> None:
    """Reset the default instrumentor. Used by test fixtures."""
    set_instrumentor(None)


def _resolve_sink(sink: str | LogSink) -> LogSink:
    if not isinstance(sink, str):
        return sink
    if sink == "logging":
        return StdlibSink()
    if sink == "memory":
        return MemorySink()
    raise LoggableConfigError(
        "Unsupported sink value. Use 'logging', 'memory', or a LogSink instance."
    )


__all__ = [
    "CallSite",
    "Instrumentor",
    "InvocationConfig",
    "Level",
    "LogSink",
    "LoggableConfigError",
    "LoggableError",
    "MemorySink",
    "StdlibSink",
    "TimeUnit",
    "configure",
    "loggable",
    "wrap",
]
