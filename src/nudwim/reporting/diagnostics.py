"""
nudwim diagnostics: the error record carried by every DwimError, and its rich
rendering as a one-line frame of the command line with carets under the
offending bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from rich.cells import cell_len
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from nudwim.source import Source, SourceSpan

__all__ = ["Diagnostic", "Emitter", "render_diagnostic"]

TAB_WIDTH: Final = 4

_HEADER_STYLE: Final = "bold red"
_CARET_STYLE: Final = "bold red"
_DIM_STYLE: Final = "dim"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    message: str
    span: SourceSpan
    source: Source
    code: str | None = None
    notes: list[str] = field(default_factory=list)
    hint: str | None = None

    def one_line(self) -> str:
        (ln, col) = self.source.line_col(self.span.start)
        code = f" [{self.code}]" if self.code else ""
        return f"ERROR{code}: {self.message} at {self.source.label}:{ln}:{col}"


def _code_frame(source: Source, span: SourceSpan) -> RenderableType:
    """
    The line holding the start of ``span``, with carets under the span. A span
    that runs onto later lines is cut at the end of the first.
    """
    line_start, line = source.line_at(span.start)
    (ln, col) = source.line_col(span.start)

    before = line[: span.start - line_start]
    marked = line[span.start - line_start : span.end - line_start]
    # display cells, so tabs and wide characters (emoji, CJK) keep carets aligned
    pad = cell_len(before.expandtabs(TAB_WIDTH))
    width = max(1, cell_len((before + marked).expandtabs(TAB_WIDTH)) - pad)

    body = Text(line.expandtabs(TAB_WIDTH))
    body.append("\n" + " " * pad)
    body.append("^" * width, style=_CARET_STYLE)

    title = Text.assemble((source.label, "italic"), ":", (f"{ln}:{col}", _DIM_STYLE))
    return Panel.fit(body, title=title, border_style=_HEADER_STYLE, padding=(0, 1))


def render_diagnostic(d: Diagnostic) -> RenderableType:
    """Header, rule, code frame, then any notes and hint."""
    head = Text("ERROR", style=_HEADER_STYLE)
    if d.code:
        head.append(f" [{d.code}]")
    head.append(f": {d.message}")

    trailer = Text()
    for n in d.notes:
        trailer.append("\n• ", style=_DIM_STYLE)
        trailer.append(n)
    if d.hint:
        trailer.append("\nHint: ", style="italic dim")
        trailer.append(d.hint)

    return Group(
        head,
        Rule(style=_HEADER_STYLE),
        _code_frame(d.source, d.span),
        *([trailer] if trailer.plain else []),
    )


class Emitter:
    """Prints diagnostics to one Console (stderr by default)."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def emit(self, d: Diagnostic) -> None:
        self.console.print(render_diagnostic(d))
