"""
nudwim exceptions: a base DwimError that wraps a Diagnostic pointing at the
offending bytes of the command line, and renders with the same rich
code-frame formatting.
"""

from __future__ import annotations

from rich.console import Console, ConsoleOptions, RenderResult

from nudwim.reporting.diagnostics import Diagnostic, render_diagnostic
from nudwim.source import Source

__all__ = [
    "DwimError",
    "MisalignedCursor",
    "InvalidText",
    "ParseFailure",
    "NoTargetFound",
    "UnknownNodeKind",
]


class DwimError(Exception):
    """
    Base nudwim exception that carries a Diagnostic and renders nicely with Rich.

    ``byte_offset`` and ``text`` are kept so the failing call can be reproduced.
    """

    code: str | None = None

    def __init__(self, diagnostic: Diagnostic, *, byte_offset: int, text: bytes):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic
        self.byte_offset = byte_offset
        self.text = bytes(text)

    @classmethod
    def at(
        cls,
        message: str,
        text: bytes,
        byte_offset: int,
        *,
        end: int | None = None,
        hint: str | None = None,
        notes: list[str] | None = None,
    ) -> DwimError:
        """Build the error with a frame under ``text[byte_offset:end]``."""
        source = Source(text)
        diagnostic = Diagnostic(
            message=message,
            span=source.byte_span(byte_offset, end),
            source=source,
            code=cls.code,
            hint=hint,
            notes=[*(notes or []), f"byte offset {byte_offset} of {len(text)}: {bytes(text)!r}"],
        )
        return cls(diagnostic, byte_offset=byte_offset, text=text)

    # Plain-text fallback (logs, or if the caller didn't use a Console)
    def __str__(self) -> str:
        return self.diagnostic.one_line()

    # Pretty rendering when printed via Rich Console
    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        _ = console
        _ = options
        yield render_diagnostic(self.diagnostic)


class MisalignedCursor(DwimError):
    """Byte cursor does not fall on a grapheme cluster boundary."""

    code = "misaligned-cursor"


class InvalidText(DwimError):
    """Command line bytes are not valid UTF-8."""

    code = "invalid-text"


class ParseFailure(DwimError):
    """The grammar could not produce a tree for the command line."""

    code = "parse-failure"


class NoTargetFound(DwimError):
    """No syntax node covers the cursor's effective position."""

    code = "no-target"


class UnknownNodeKind(LookupError):
    """
    A node kind name is not part of the grammar. Raised while resolving kind ids
    at import time, so it is a configuration error rather than a per-call one.
    """

    def __init__(self, name: str, known: list[str]):
        super().__init__(f"No node kind named {name!r} in the command-line grammar. Known: {known}")
        self.name = name
