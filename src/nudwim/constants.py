"""
nudwim.constants
================

Single place for the glyphs, byte values and grammar names shared by the
buffer model, the locator and the rewriter.
"""

from __future__ import annotations

from typing import Final

# ---- marked-string form ------------------------------------------------------

MARKER: Final = "|"

# ---- bytes the rewriter looks for or inserts -----------------------------------

SINGLE_QUOTE: Final = ord("'")
DOUBLE_QUOTE: Final = ord('"')
BACKSLASH: Final = ord("\\")
OPEN_PAREN: Final = ord("(")
CLOSE_PAREN: Final = ord(")")
DOLLAR: Final = ord("$")

# A literal "(" spliced into a single-quoted interpolation as a sub-expression
SINGLE_QUOTED_PAREN: Final = b"('(')"
# A literal "(" inside a double-quoted interpolation
ESCAPED_PAREN: Final = b"\\("

# What an empty command line turns into
EMPTY_INTERPOLATION: Final = '$"(|)"'

# ---- grammar node kinds --------------------------------------------------------

KIND_STRING: Final = "val_string"
KIND_ERROR: Final = "ERROR"

# ---- process exit codes ----------------------------------------------------------

EXIT_OK: Final = 0
EXIT_FAILURE: Final = 2
