"""Logger identity resolution and level checks against a sink."""

from __future__ import annotations

from ..models import Level
from ..sinks import LogSink


class LoggerResolver:
    """Stateless bridge between a call site and the log sink."""

    def __init__(self, sink: LogSink) -> None:
        self.sink = sink

    @staticmethod
    def source_for(declaring: str, explicit_name: str = "") -> str:
        return explicit_name or declaring

    def is_enabled(self, level: Level, source: str) -> bool:
        return self.sink.is_enabled(level, source)

    def log(self, level: Level, source: str, message: str) -> None:
        self.sink.log(level, source, message)
