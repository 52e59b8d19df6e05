"""Log sinks."""

from .base import LogSink
from .memory import LogEntry, MemorySink
from .stdlib import StdlibSink

__all__ = ["LogEntry", "LogSink", "MemorySink", "StdlibSink"]
