"""Rich-based console output for instrumented call lines."""

from __future__ import annotations

import logging
from typing import IO

from rich.console import Console
from rich.logging import RichHandler

from .models import Level

_HANDLER_NAME = "loggable-console"


def configure_console_logging(
    level: Level = Level.INFO,
    *,
    stream: IO[str] | None = None,
    width: int | None = None,
) -> RichHandler:
    """Send log records at ``level`` and above to a rich console on the root logger.

    Calling it again replaces the handler it installed before.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    console = Console(file=stream, width=width, markup=False)
    handler = RichHandler(console=console, markup=False, show_path=False, rich_tracebacks=False)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level.numeric)
    root.addHandler(handler)
    root.setLevel(level.numeric)
    return handler
