from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import grapheme

from nudwim.cmdline.bytes import ByteBuffer
from nudwim.constants import MARKER
from nudwim.errors import InvalidText, MisalignedCursor

__all__ = ["GraphemeBuffer", "grapheme_starts"]


def grapheme_starts(text: str) -> Iterator[int]:
    """Yield the UTF-8 byte offset at which each grapheme cluster of ``text`` starts."""
    offset = 0
    for g in grapheme.graphemes(text):
        yield offset
        offset += len(g.encode("utf-8"))


@dataclass(eq=True, slots=True)
class GraphemeBuffer:
    """
    A command line as Unicode text plus a cursor counted in extended grapheme
    clusters. This is the form the shell hands us and expects back.
    """

    text: str
    cursor: int

    def __post_init__(self) -> None:
        n = grapheme.length(self.text)
        if not (0 <= self.cursor <= n):
            raise ValueError(f"grapheme cursor {self.cursor} out of range [0, {n}] for {self.text!r}")

    def __repr__(self) -> str:
        return f"GraphemeBuffer({self.to_marked()!r})"

    # ───────────── byte conversions ─────────────

    def to_bytes(self) -> ByteBuffer:
        data = self.text.encode("utf-8")
        for idx, start in enumerate(grapheme_starts(self.text)):
            if idx == self.cursor:
                return ByteBuffer(bytearray(data), start)
        return ByteBuffer(bytearray(data), len(data))

    @classmethod
    def from_bytes(cls, buf: ByteBuffer) -> GraphemeBuffer:
        data = bytes(buf.text)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidText.at(
                f"Command line is not valid UTF-8 ({e.reason})",
                data,
                e.start,
                end=e.end,
            ) from e

        # cursor errors are only reported against valid text
        if buf.cursor == len(data):
            return cls(text, grapheme.length(text))
        for idx, start in enumerate(grapheme_starts(text)):
            if start == buf.cursor:
                return cls(text, idx)
        raise MisalignedCursor.at(
            f"Byte index of cursor {buf.cursor} does not fall on a grapheme boundary",
            data,
            buf.cursor,
        )

    # ───────────── marked-string form ─────────────

    @classmethod
    def from_marked(cls, marked: str, marker: str = MARKER) -> GraphemeBuffer:
        parts: list[str] = []
        cursor: int | None = None
        for idx, g in enumerate(grapheme.graphemes(marked)):
            if g != marker:
                parts.append(g)
            elif cursor is None:
                cursor = idx
            else:
                raise ValueError(f"Multiple {marker!r} in {marked!r}")
        if cursor is None:
            raise ValueError(f"No {marker!r} in {marked!r}")
        return cls("".join(parts), cursor)

    def to_marked(self, marker: str = MARKER) -> str:
        gs = list(grapheme.graphemes(self.text))
        return "".join(gs[: self.cursor]) + marker + "".join(gs[self.cursor :])
