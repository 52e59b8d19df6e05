"""In-memory sink."""

from __future__ import annotations

import threading

from pydantic import BaseModel, ConfigDict

from ..models import Level


class LogEntry(BaseModel):
    """One emitted log line."""

    model_config = ConfigDict(strict=True, frozen=True)

    level: Level
    source: str
    message: str


class MemorySink:
    """Keeps every line in memory. Good for tests and short-lived scripts.

    Lines below ``threshold`` are reported as disabled but are still stored
    when emitted, so callers can see exactly what the wrapper chose to send.
    ``overrides`` sets a per-source threshold.
    """

    def __init__(
        self,
        threshold: Level = Level.TRACE,
        overrides: dict[str, Level] | None = None,
    ) -> None:
        self.threshold = threshold
        self.overrides: dict[str, Level] = dict(overrides or {})
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> list[LogEntry]:
        with self._lock:
            return list(self._entries)

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self.entries]

    def is_enabled(self, level: Level, source: str) -> bool:
        threshold = self.overrides.get(source, self.threshold)
        return level.numeric >= threshold.numeric

    def log(self, level: Level, source: str, message: str) -> None:
        with self._lock:
            self._entries.append(LogEntry(level=level, source=source, message=message))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
