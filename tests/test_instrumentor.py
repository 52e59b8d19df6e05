from __future__ import annotations

import asyncio
import re
from abc import ABC
from concurrent.futures import ThreadPoolExecutor

import pytest
from conftest import StepClock

from loggable.core import Instrumentor
from loggable.models import InvocationConfig, Level, TimeUnit
from loggable.sinks import MemorySink


class Foo:
    def __str__(self) -> str:
        return "some text"

    def revert(self, text: str) -> str:
        return text[::-1]

    def last(self, text: str) -> str:
        return text[-1]


class Retryable(ABC):
    """Capability marker for errors a caller may retry."""


class RetryMixin:
    pass


class _TransientError(Exception):
    pass


class _ThrottledError(RetryMixin, Exception):
    pass


Retryable.register(_TransientError)


def store(value: int) -> None:
    pass


def compute(value: int) -> int:
    return value * 2


def fail(value: int) -> int:
    raise ValueError("bad input")


def _instrumentor(sink: MemorySink, step: int = 1_500) -> Instrumentor:
    return Instrumentor(sink=sink, clock=StepClock(step))


def test_logs_simple_call() -> None:
    sink = MemorySink()
    revert = _instrumentor(sink).wrap(InvocationConfig(trim=-1), Foo.revert)

    assert revert(Foo(), "hello") == "olleh"
    assert sink.messages == ["#revert('hello'): 'olleh' in 1.50µs"]
    entry = sink.entries[0]
    assert entry.level == Level.INFO
    assert entry.source == f"{__name__}.Foo"


def test_logs_simple_call_with_real_clock() -> None:
    sink = MemorySink()
    revert = Instrumentor(sink=sink).wrap(InvocationConfig(trim=-1), Foo.revert)

    revert(Foo(), "hello")

    assert re.fullmatch(r"#revert\('hello'\): 'olleh' in \d+\.\d{2}(ns|µs|ms|s)", sink.messages[0])


def test_void_call_with_prepend_logs_entry_then_exit() -> None:
    sink = MemorySink()
    seen_before_call: list[int] = []

    def save(value: int) -> None:
        seen_before_call.append(len(sink.entries))

    wrapped = _instrumentor(sink).wrap(InvocationConfig(level=Level.DEBUG, prepend=True), save)

    assert wrapped(3) is None
    assert seen_before_call == [1]
    assert sink.messages == ["#save(3): entered", "#save(3): in 1.50µs"]
    assert [entry.level for entry in sink.entries] == [Level.DEBUG, Level.DEBUG]


def test_entry_line_is_not_gated_by_level() -> None:
    sink = MemorySink(threshold=Level.ERROR)
    wrapped = _instrumentor(sink).wrap(InvocationConfig(level=Level.DEBUG, prepend=True), store)

    wrapped(1)

    assert sink.messages == ["#store(1): entered"]


def test_disabled_level_and_fast_call_logs_nothing() -> None:
    sink = MemorySink(threshold=Level.WARN)
    wrapped = _instrumentor(sink).wrap(InvocationConfig(level=Level.INFO), compute)

    assert wrapped(2) == 4
    assert sink.entries == []


def test_slow_call_escalates_to_warn_even_when_level_disabled() -> None:
    sink = MemorySink(threshold=Level.ERROR)
    config = InvocationConfig(level=Level.DEBUG, limit=1, unit=TimeUnit.MILLISECONDS)
    wrapped = _instrumentor(sink, step=2_000_000).wrap(config, compute)

    assert wrapped(5) == 10
    assert sink.messages == ["#compute(5): 10 in 2.00ms (too slow!)"]
    assert sink.entries[0].level == Level.WARN


def test_slow_call_escalates_enabled_level_too() -> None:
    sink = MemorySink()
    config = InvocationConfig(level=Level.TRACE, limit=1, unit=TimeUnit.SECONDS)
    wrapped = _instrumentor(sink, step=3_200_000_000).wrap(config, compute)

    wrapped(1)

    assert sink.entries[0].level == Level.WARN
    assert sink.messages[0].endswith(" in 3.20s (too slow!)")


def test_call_exactly_at_budget_is_not_slow() -> None:
    sink = MemorySink()
    config = InvocationConfig(level=Level.INFO, limit=1, unit=TimeUnit.MILLISECONDS)
    wrapped = _instrumentor(sink, step=1_000_000).wrap(config, compute)

    wrapped(1)

    assert sink.entries[0].level == Level.INFO
    assert "too slow" not in sink.messages[0]


def test_skip_result_and_skip_args() -> None:
    sink = MemorySink()
    instrumentor = _instrumentor(sink)
    instrumentor.wrap(InvocationConfig(skip_result=True), compute)(1)
    instrumentor.wrap(InvocationConfig(skip_args=True), compute)(1)

    assert sink.messages == ["#compute(1): ... in 1.50µs", "#compute(...): 2 in 1.50µs"]


def test_result_is_trimmed() -> None:
    sink = MemorySink()
    wrapped = _instrumentor(sink).wrap(InvocationConfig(trim=20), lambda: "z" * 50)

    wrapped()

    assert sink.messages == ["#<lambda>(): 'zzzzzzzzz..32..zzz' in 1.50µs"]


def test_precision_applies_to_duration() -> None:
    sink = MemorySink()
    _instrumentor(sink).wrap(InvocationConfig(precision=3), compute)(1)
    _instrumentor(sink).wrap(InvocationConfig(precision=-1), compute)(1)

    assert sink.messages == ["#compute(1): 2 in 1.500µs", "#compute(1): 2 in 2µs"]


def test_log_this_adds_receiver_text() -> None:
    sink = MemorySink()
    last = _instrumentor(sink).wrap(InvocationConfig(log_this=True), Foo.last)

    assert last(Foo(), "TEST") == "T"
    assert sink.messages == ["some text#last('TEST'): 'T' in 1.50µs"]


def test_explicit_logger_name() -> None:
    sink = MemorySink()
    _instrumentor(sink).wrap(InvocationConfig(name="test-logger"), compute)(1)

    assert sink.entries[0].source == "test-logger"


def test_failure_logs_error_and_rethrows() -> None:
    sink = MemorySink(threshold=Level.ERROR)
    wrapped = _instrumentor(sink).wrap(InvocationConfig(level=Level.DEBUG), fail)

    with pytest.raises(ValueError, match="bad input"):
        wrapped(1)

    assert len(sink.entries) == 1
    entry = sink.entries[0]
    assert entry.level == Level.ERROR
    assert entry.message.startswith(f"#fail(1): thrown ValueError(bad input) out of {__name__}#fail[")
    assert entry.message.endswith("] in 1.50µs")


def test_exact_ignored_error_is_not_logged_but_rethrown() -> None:
    sink = MemorySink()
    wrapped = _instrumentor(sink).wrap(InvocationConfig(ignore=[ValueError]), fail)

    with pytest.raises(ValueError):
        wrapped(1)

    assert sink.entries == []


def test_subclass_of_ignored_error_is_suppressed() -> None:
    sink = MemorySink()

    def do_throw() -> None:
        raise NotImplementedError

    wrapped = _instrumentor(sink).wrap(InvocationConfig(ignore=[OSError, RuntimeError]), do_throw)

    with pytest.raises(NotImplementedError):
        wrapped()

    assert sink.entries == []


def test_error_registered_with_ignored_capability_is_suppressed() -> None:
    sink = MemorySink()
    original = _TransientError("try again")

    def flaky() -> None:
        raise original

    wrapped = _instrumentor(sink).wrap(InvocationConfig(ignore=[Retryable]), flaky)

    with pytest.raises(_TransientError) as info:
        wrapped()

    assert info.value is original
    assert sink.entries == []


def test_error_inheriting_ignored_mixin_is_suppressed() -> None:
    sink = MemorySink()

    def throttled() -> None:
        raise _ThrottledError("429")

    wrapped = _instrumentor(sink).wrap(InvocationConfig(ignore=[RetryMixin]), throttled)

    with pytest.raises(_ThrottledError):
        wrapped()

    assert sink.entries == []


def test_error_outside_ignored_capability_is_logged() -> None:
    sink = MemorySink()
    wrapped = _instrumentor(sink).wrap(InvocationConfig(ignore=[Retryable]), fail)

    with pytest.raises(ValueError):
        wrapped(1)

    assert [entry.level for entry in sink.entries] == [Level.ERROR]


def test_rethrown_error_is_the_original_object() -> None:
    sink = MemorySink()
    cause = KeyError("missing")
    original = RuntimeError("lookup failed")

    def lookup() -> None:
        raise original from cause

    wrapped = _instrumentor(sink).wrap(InvocationConfig(), lookup)

    with pytest.raises(RuntimeError) as info:
        wrapped()

    assert info.value is original
    assert info.value.__cause__ is cause
    assert "thrown RuntimeError(lookup failed)" in sink.messages[0]


def test_toxic_argument_does_not_break_the_call() -> None:
    class Toxic:
        def __str__(self) -> str:
            raise ValueError("boom")

    sink = MemorySink()
    wrapped = _instrumentor(sink).wrap(InvocationConfig(), lambda value: 1)

    assert wrapped(Toxic()) == 1
    assert "thrown ValueError(boom)]): 1 in 1.50µs" in sink.messages[0]


def test_recursive_calls_each_log_their_own_line() -> None:
    sink = MemorySink()

    def fact(n: int) -> int:
        return 1 if n <= 1 else n * wrapped(n - 1)

    wrapped = _instrumentor(sink).wrap(InvocationConfig(), fact)

    assert wrapped(3) == 6
    prefixes = [message.split(" in ")[0] for message in sink.messages]
    assert prefixes == ["#fact(1): 1", "#fact(2): 2", "#fact(3): 6"]


def test_concurrent_calls_log_independently() -> None:
    sink = MemorySink()
    wrapped = Instrumentor(sink=sink).wrap(InvocationConfig(), compute)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(wrapped, range(40)))

    assert results == [value * 2 for value in range(40)]
    assert len(sink.entries) == 40
    assert {message.split(" in ")[0] for message in sink.messages} == {
        f"#compute({value}): {value * 2}" for value in range(40)
    }


@pytest.mark.asyncio
async def test_async_call_is_logged() -> None:
    sink = MemorySink()

    async def fetch(key: str) -> str:
        await asyncio.sleep(0)
        return key.upper()

    wrapped = _instrumentor(sink).wrap(InvocationConfig(), fetch)

    assert await wrapped("a") == "A"
    assert sink.messages == ["#fetch('a'): 'A' in 1.50µs"]


@pytest.mark.asyncio
async def test_async_failure_is_logged_and_rethrown() -> None:
    sink = MemorySink()

    async def explode() -> None:
        await asyncio.sleep(0)
        raise TimeoutError("slow upstream")

    wrapped = _instrumentor(sink).wrap(InvocationConfig(), explode)

    with pytest.raises(TimeoutError, match="slow upstream"):
        await wrapped()

    assert sink.entries[0].level == Level.ERROR
    assert "thrown TimeoutError(slow upstream)" in sink.messages[0]
