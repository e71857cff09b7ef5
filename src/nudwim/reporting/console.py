"""
Script-friendly helpers for diagnostics output:
- `use_diagnostics(...)`: context manager that sets up the stderr Rich console
  with the configured color behavior.
- `print_exception(...)`: pretty-print a DwimError on the active console.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from nudwim.config import ColorMode
from nudwim.errors import DwimError
from nudwim.reporting.diagnostics import Emitter

__all__ = ["make_console", "use_diagnostics", "active_console", "print_exception"]


# Track the active Console so print_exception() can reuse the same settings.
_active_console: contextvars.ContextVar[Console | None] = contextvars.ContextVar(
    "_active_console", default=None
)


def make_console(color: ColorMode = ColorMode.AUTO) -> Console:
    return Console(
        stderr=True,
        force_terminal=(color is ColorMode.ALWAYS),
        no_color=(color is ColorMode.NEVER),
    )


@contextmanager
def use_diagnostics(color: ColorMode = ColorMode.AUTO) -> Iterator[Console]:
    """Make a stderr Console the active one for the duration of the block."""
    console = make_console(color)
    token = _active_console.set(console)
    try:
        yield console
    finally:
        _active_console.reset(token)


def active_console() -> Console:
    return _active_console.get() or Console(stderr=True)


def print_exception(e: DwimError) -> None:
    """Pretty-print a DwimError; uses the active Console if available."""
    Emitter(active_console()).emit(e.diagnostic)
