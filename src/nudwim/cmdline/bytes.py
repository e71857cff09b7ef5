from __future__ import annotations

from dataclasses import dataclass, field

from nudwim.constants import MARKER

__all__ = ["ByteBuffer"]


@dataclass(eq=True, slots=True)
class ByteBuffer:
    """
    A command line as raw bytes plus a byte-offset cursor.

    The cursor sits immediately before ``text[cursor]``; ``cursor == len(text)``
    means end-of-text. Every editing primitive keeps ``0 <= cursor <= len(text)``.
    """

    text: bytearray = field(default_factory=bytearray)
    cursor: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.text, bytearray):
            self.text = bytearray(self.text)
        if not (0 <= self.cursor <= len(self.text)):
            raise ValueError(
                f"cursor {self.cursor} out of range [0, {len(self.text)}] for {bytes(self.text)!r}"
            )

    # ───────────── marked-string form ─────────────

    @classmethod
    def from_marked(cls, marked: str, marker: str = MARKER) -> ByteBuffer:
        """
        Build from text with a marker glyph standing in for the cursor.

        Only the first marker is the cursor; later ones are kept as text, so a
        pipe after the cursor (`echo 'a|' | sort`) survives. GraphemeBuffer
        is stricter and rejects a second marker.
        """
        raw = marked.encode("utf-8")
        glyph = marker.encode("utf-8")
        idx = raw.find(glyph)
        if idx < 0:
            raise ValueError(f"No {marker!r} in {marked!r}")
        return cls(bytearray(raw[:idx] + raw[idx + len(glyph):]), idx)

    def to_marked(self, marker: str = MARKER) -> str:
        before = bytes(self.text[: self.cursor]).decode("utf-8", errors="replace")
        after = bytes(self.text[self.cursor :]).decode("utf-8", errors="replace")
        return before + marker + after

    def __repr__(self) -> str:
        return f"ByteBuffer({self.to_marked()!r})"

    def copy(self) -> ByteBuffer:
        return ByteBuffer(bytearray(self.text), self.cursor)

    @property
    def at_end(self) -> bool:
        return self.cursor == len(self.text)

    # ───────────── editing primitives ─────────────

    def _check_pos(self, pos: int) -> None:
        if not (0 <= pos <= len(self.text)):
            raise IndexError(f"position {pos} out of range [0, {len(self.text)}]")

    def insert(self, pos: int, byte: int, push_cursor: bool) -> None:
        """
        Insert one byte at ``pos`` (``pos == len(text)`` appends).

        With ``push_cursor`` a cursor at ``pos`` moves right with the text,
        leaving the new byte before it; without, it stays put and the new byte
        lands after it.
        """
        self._check_pos(pos)
        self.text.insert(pos, byte)
        if (pos <= self.cursor) if push_cursor else (pos < self.cursor):
            self.cursor += 1

    def insert_push_cursor(self, pos: int, byte: int) -> None:
        self.insert(pos, byte, push_cursor=True)

    def insert_no_push_cursor(self, pos: int, byte: int) -> None:
        self.insert(pos, byte, push_cursor=False)

    def delete(self, pos: int, pull_cursor: bool) -> None:
        """Remove the byte at ``pos`` (``pos == len(text)`` removes the last byte)."""
        if not self.text:
            raise IndexError("delete from empty buffer")
        self._check_pos(pos)
        if pos == len(self.text):
            self.text.pop()
        else:
            del self.text[pos]
        if (pos <= self.cursor) if pull_cursor else (pos < self.cursor):
            self.cursor -= 1
        # a pulled cursor at 0, or an unpulled one at the old end
        self.cursor = max(0, min(self.cursor, len(self.text)))

    def delete_pull_cursor(self, pos: int) -> None:
        self.delete(pos, pull_cursor=True)

    def delete_no_pull_cursor(self, pos: int) -> None:
        self.delete(pos, pull_cursor=False)

    def overwrite_range(self, start: int, end: int, replacement: bytes) -> None:
        """
        Replace ``text[start:end]`` with ``replacement``.

        A cursor at or after ``end`` keeps its place relative to the text that
        follows the span. A cursor before or strictly inside the span keeps its
        offset, clamped to the new length.
        """
        if not (0 <= start <= end <= len(self.text)):
            raise IndexError(f"range {start}..{end} out of bounds for length {len(self.text)}")
        self.text[start:end] = replacement
        if self.cursor >= end:
            self.cursor = self.cursor - (end - start) + len(replacement)
        else:
            self.cursor = min(self.cursor, len(self.text))
