"""Call instrumentation: wraps calls so each one emits a timed log line."""

from __future__ import annotations

import inspect
import time
import warnings
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

from ..exceptions import LoggableConfigError
from ..models import CallSite, Invocation, InvocationConfig, Level
from ..sinks import LogSink, StdlibSink
from .duration import render_duration
from .errors import first_frame, is_ignored
from .resolver import LoggerResolver
from .text import render_error, render_signature, render_value

P = ParamSpec("P")
R = TypeVar("R")

Clock = Callable[[], int]

TOO_SLOW = " (too slow!)"


class Instrumentor:
    """Owns the sink and the clock used by every call it wraps.

    Error-handling contract
    ----------------------
    - Logging never changes the outcome of a wrapped call: its return value
      is passed through and whatever it raises is re-raised untouched.
    - A sink that fails while emitting is reported with ``warnings.warn``
      and the line is dropped.
    """

    def __init__(self, sink: LogSink | None = None, clock: Clock | None = None) -> None:
        self.sink: LogSink = sink or StdlibSink()
        self.clock: Clock = clock or time.perf_counter_ns
        self.resolver = LoggerResolver(self.sink)

    def wrap(
        self,
        config: InvocationConfig,
        func: Callable[P, R],
        call_site: CallSite | None = None,
    ) -> Callable[P, R]:
        """Return ``func`` wrapped so that every call is logged per ``config``."""
        if not callable(func):
            raise LoggableConfigError(f"Cannot instrument non-callable {func!r}")
        site = call_site or CallSite.of(func)
        return wrap_call(config, func, site, lambda: self)

    def call(
        self,
        config: InvocationConfig,
        site: CallSite,
        func: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        """Run ``func`` synchronously, logging its outcome."""
        source, invocation = self._enter(config, site, args, kwargs)
        try:
            result = func(*args, **kwargs)
        except BaseException as exc:
            self._failed(config, source, invocation, exc)
            raise
        self._succeeded(config, source, invocation, result)
        return result

    async def acall(
        self,
        config: InvocationConfig,
        site: CallSite,
        func: Callable[..., Awaitable[Any]],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        """Await ``func``, logging its outcome exactly like :meth:`call`."""
        source, invocation = self._enter(config, site, args, kwargs)
        try:
            result = await func(*args, **kwargs)
        except BaseException as exc:
            self._failed(config, source, invocation, exc)
            raise
        self._succeeded(config, source, invocation, result)
        return result

    def _enter(
        self,
        config: InvocationConfig,
        site: CallSite,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[str, Invocation]:
        source = self.resolver.source_for(site.declaring, config.name)
        invocation = Invocation.start(site, args, kwargs)
        if config.prepend:
            self._emit(config.level, source, f"{self._signature(config, invocation)}: entered")
        invocation.start_ns = self.clock()
        return source, invocation

    def _succeeded(
        self,
        config: InvocationConfig,
        source: str,
        invocation: Invocation,
        result: object,
    ) -> None:
        elapsed = self.clock() - invocation.start_ns
        over = elapsed > config.budget_ns
        level = config.level
        if not (over or self._enabled(level, source)):
            return
        msg = [self._signature(config, invocation), ":"]
        if not invocation.returns_none:
            msg.append(" " + render_value(result, config.trim, config.skip_result))
        msg.append(" in " + render_duration(elapsed, config.precision))
        if over:
            level = Level.WARN
            msg.append(TOO_SLOW)
        self._emit(level, source, "".join(msg))

    def _failed(
        self,
        config: InvocationConfig,
        source: str,
        invocation: Invocation,
        exc: BaseException,
    ) -> None:
        elapsed = self.clock() - invocation.start_ns
        if is_ignored(type(exc), config.ignore):
            return
        msg = [f"{self._signature(config, invocation)}: thrown {render_error(exc)}"]
        origin = first_frame(exc)
        if origin is not None:
            msg.append(f" out of {origin}")
        msg.append(" in " + render_duration(elapsed, config.precision))
        self._emit(Level.ERROR, source, "".join(msg))

    @staticmethod
    def _signature(config: InvocationConfig, invocation: Invocation) -> str:
        return render_signature(
            invocation,
            trim=config.trim,
            skip_args=config.skip_args,
            log_this=config.log_this,
        )

    def _enabled(self, level: Level, source: str) -> bool:
        try:
            return self.resolver.is_enabled(level, source)
        except Exception:
            warnings.warn(f"loggable: sink failed level check for {source!r}", stacklevel=4)
            return False

    def _emit(self, level: Level, source: str, message: str) -> None:
        try:
            self.resolver.log(level, source, message)
        except Exception:
            warnings.warn(
                f"loggable: failed to emit {level.name} line for {source!r}. Line dropped.",
                stacklevel=4,
            )


def wrap_call(
    config: InvocationConfig,
    func: Callable[P, R],
    site: CallSite,
    instrumentor: Callable[[], Instrumentor],
) -> Callable[P, R]:
    """Build the sync or async wrapper around ``func``.

    ``instrumentor`` is looked up on every call so wrappers created at import
    time follow later configuration changes.
    """
    if inspect.iscoroutinefunction(func):
        async_func = cast(Callable[P, Awaitable[Any]], func)

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            return await instrumentor().acall(config, site, async_func, args, kwargs)

        return cast(Callable[P, R], async_wrapper)

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        return cast(R, instrumentor().call(config, site, func, args, kwargs))

    return wrapper
