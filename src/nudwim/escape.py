"""
Escaping the parentheses inside a quoted region so they stay literal once the
string becomes an interpolation.

Both functions edit ``buf`` in place over ``[start, end)`` and return the new
end of the region.
"""

from __future__ import annotations

from enum import Enum, auto

from nudwim.cmdline.bytes import ByteBuffer
from nudwim.constants import BACKSLASH, ESCAPED_PAREN, OPEN_PAREN, SINGLE_QUOTED_PAREN

__all__ = ["escape_single", "escape_double"]


def escape_single(buf: ByteBuffer, start: int, end: int) -> int:
    """
    Single-quoted text has no escape character, so each ``(`` is replaced by a
    sub-expression that evaluates to a literal paren: ``('(')``.
    """
    idx = start
    while idx < end:
        if buf.text[idx] == OPEN_PAREN:
            buf.overwrite_range(idx, idx + 1, SINGLE_QUOTED_PAREN)
            idx += len(SINGLE_QUOTED_PAREN)
            end += len(SINGLE_QUOTED_PAREN) - 1
        else:
            idx += 1
    return end


class _State(Enum):
    NORMAL = auto()
    ESCAPED = auto()


def escape_double(buf: ByteBuffer, start: int, end: int) -> int:
    """
    Backslash-escape each ``(`` that the user has not escaped already.
    """
    state = _State.NORMAL
    idx = start
    while idx < end:
        byte = buf.text[idx]
        if state is _State.ESCAPED:
            state = _State.NORMAL
            idx += 1
        elif byte == BACKSLASH:
            state = _State.ESCAPED
            idx += 1
        elif byte == OPEN_PAREN:
            buf.overwrite_range(idx, idx + 1, ESCAPED_PAREN)
            idx += len(ESCAPED_PAREN)
            end += len(ESCAPED_PAREN) - 1
        else:
            idx += 1
    return end
