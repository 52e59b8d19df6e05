"""Core instrumentation engine."""

from .decorators import loggable
from .defaults import get_instrumentor, set_instrumentor
from .duration import render_duration
from .errors import first_frame, is_ignored
from .instrumentor import Instrumentor
from .resolver import LoggerResolver
from .text import DOTS, NULL, render_error, render_signature, render_value, trim_text

__all__ = [
    "DOTS",
    "NULL",
    "Instrumentor",
    "LoggerResolver",
    "first_frame",
    "get_instrumentor",
    "is_ignored",
    "loggable",
    "render_duration",
    "render_error",
    "render_signature",
    "render_value",
    "set_instrumentor",
    "trim_text",
]
