"""
nudwim.cmdline
==============

The two views of a command line: raw bytes with a byte cursor (what the
rewriter edits) and Unicode text with a grapheme cursor (what the shell sees).
"""

from __future__ import annotations

from nudwim.cmdline.bytes import ByteBuffer
from nudwim.cmdline.graphemes import GraphemeBuffer

__all__ = ["ByteBuffer", "GraphemeBuffer"]
