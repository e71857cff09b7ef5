"""
Logging setup for the CLI. Library modules only ever call
``logging.getLogger(__name__)``; handlers are installed here, once, by the
process entry point.
"""

from __future__ import annotations

import logging
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["TRACE", "OFF", "level_for_verbosity", "configure_logging"]

# Finer than DEBUG: full parse-tree dumps
TRACE: Final = 5
logging.addLevelName(TRACE, "TRACE")

OFF: Final = logging.CRITICAL + 10

# Net verbosity (-v count minus -q count) to level; 0 is the default
_LEVELS: Final = {
    -1: OFF,
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
    4: TRACE,
}


def level_for_verbosity(verbosity: int) -> int:
    clamped = max(min(verbosity, max(_LEVELS)), min(_LEVELS))
    return _LEVELS[clamped]


def configure_logging(verbosity: int, console: Console | None = None) -> int:
    """Install a RichHandler on the ``nudwim`` logger; returns the chosen level."""
    level = level_for_verbosity(verbosity)
    log = logging.getLogger("nudwim")
    for h in list(log.handlers):
        log.removeHandler(h)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    log.setLevel(level)
    log.propagate = False
    return level
