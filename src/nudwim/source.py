from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SourceSpan:
    '''0-indexed, [start, end) half-open interval of characters in a Source's text.'''
    start: int  # inclusive
    end: int    # exclusive

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"SourceSpan.start cannot be negative (got {self.start})")
        if self.end < self.start:
            raise ValueError(f"SourceSpan.end ({self.end}) < start ({self.start})")


@dataclass(frozen=True, slots=True)
class Source:
    """
    A command line being reported on by a diagnostic.

    Diagnostics are raised against byte offsets, but frames are drawn over
    ``text``, the bytes decoded with U+FFFD standing in for anything that is
    not UTF-8.
    """

    raw: bytes
    label: str = "<cmdline>"
    text: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", bytes(self.raw))
        object.__setattr__(self, "text", self.raw.decode("utf-8", errors="replace"))

    def char_index(self, byte_pos: int) -> int:
        '''Character offset in ``text`` of the byte offset ``byte_pos``, clamped.'''
        prefix = self.raw[: max(0, byte_pos)].decode("utf-8", errors="replace")
        return min(len(prefix), len(self.text))

    def byte_span(self, start: int, end: int | None = None) -> SourceSpan:
        '''
        Character span covering bytes [start, end). A missing or empty end
        widens to one character unless the text is empty.
        '''
        n = len(self.text)
        lo = min(self.char_index(start), max(n - 1, 0))
        hi = self.char_index(end) if end is not None else lo + 1
        return SourceSpan(lo, min(max(hi, lo + 1), n))

    def line_col(self, pos: int) -> tuple[int, int]:
        '''1-indexed (line, col) of character ``pos``; accepts pos == len(text).'''
        if not (0 <= pos <= len(self.text)):
            raise ValueError(f"pos {pos} out of range [0, {len(self.text)}]")
        line_start = self.text.rfind("\n", 0, pos) + 1
        return self.text.count("\n", 0, pos) + 1, pos - line_start + 1

    def line_at(self, pos: int) -> tuple[int, str]:
        '''Start offset and text (without its newline) of the line holding ``pos``.'''
        line_start = self.text.rfind("\n", 0, pos) + 1
        line_end = self.text.find("\n", line_start)
        if line_end < 0:
            line_end = len(self.text)
        return line_start, self.text[line_start:line_end].rstrip("\r")
