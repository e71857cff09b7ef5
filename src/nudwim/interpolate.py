from __future__ import annotations

import logging

from nudwim.cmdline.bytes import ByteBuffer
from nudwim.cmdline.graphemes import GraphemeBuffer
from nudwim.constants import CLOSE_PAREN, DOLLAR, EMPTY_INTERPOLATION, OPEN_PAREN
from nudwim.escape import escape_double, escape_single
from nudwim.locate import EmptyInput, NoMatch, TargetRange, locate

__all__ = ["insert_interpolation", "dwim_interpolate", "dwim_interpolate_graphemes"]

logger = logging.getLogger(__name__)


def insert_interpolation(buf: ByteBuffer, start: int) -> None:
    """
    Put ``$`` before the opening quote at ``start`` and an empty ``()`` hole at
    the cursor, leaving the cursor inside the hole. The order of the three
    inserts is what places the cursor.
    """
    buf.insert_push_cursor(start, DOLLAR)
    buf.insert_push_cursor(buf.cursor, OPEN_PAREN)
    buf.insert_no_push_cursor(buf.cursor, CLOSE_PAREN)


def dwim_interpolate(buf: ByteBuffer) -> ByteBuffer:
    """
    Turn the string literal under the cursor into an interpolation with an
    empty hole at the cursor.

    Returns a new buffer; ``buf`` is never modified. When the cursor is not in
    a string the result equals ``buf``. Errors are raised before any editing
    starts, so there is no partially rewritten result.
    """
    found = locate(buf)

    if isinstance(found, EmptyInput):
        logger.debug("empty command line")
        return ByteBuffer.from_marked(EMPTY_INTERPOLATION)
    if isinstance(found, NoMatch):
        logger.debug("nothing to interpolate (cursor in %s)", found.kind)
        return buf.copy()

    assert isinstance(found, TargetRange)
    out = buf.copy()
    if found.quote == "'":
        logger.debug("single quote string")
        escape_single(out, found.start, found.end)
    else:
        logger.debug("double quote string")
        escape_double(out, found.start, found.end)
    insert_interpolation(out, found.start)
    logger.info("interpolated %r -> %r", buf.to_marked(), out.to_marked())
    return out


def dwim_interpolate_graphemes(buf: GraphemeBuffer) -> GraphemeBuffer:
    """Same as ``dwim_interpolate``, for a grapheme-cursor buffer."""
    return GraphemeBuffer.from_bytes(dwim_interpolate(buf.to_bytes()))
