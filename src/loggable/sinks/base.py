"""Log sink abstraction."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import Level


@runtime_checkable
class LogSink(Protocol):
    """Protocol for the backend that receives rendered log lines.

    Implementations must be safe to call from several threads at once.
    """

    def is_enabled(self, level: Level, source: str) -> bool: ...
    def log(self, level: Level, source: str, message: str) -> None: ...
