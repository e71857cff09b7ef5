"""
Find the quoted region of a command line that the cursor is in.

Parsing and deciding happen here; nothing in this module edits the buffer, so
the tree never outlives the text it describes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Literal, TypeAlias

from nudwim.cmdline.bytes import ByteBuffer
from nudwim.constants import DOUBLE_QUOTE, KIND_ERROR, KIND_STRING, SINGLE_QUOTE
from nudwim.errors import NoTargetFound
from nudwim.logs import TRACE
from nudwim.syntax.debug import pretty_print_tree
from nudwim.syntax.parse import kind_id, parse
from nudwim.syntax.tree import Node, SyntaxTree

__all__ = [
    "TargetRange",
    "EmptyInput",
    "NoMatch",
    "LocateResult",
    "find_ancestor",
    "classify",
    "locate",
]

logger = logging.getLogger(__name__)

# Resolved once; a grammar without these kinds fails at import
STRING_KIND: Final = kind_id(KIND_STRING)
ERROR_KIND: Final = kind_id(KIND_ERROR)

QuoteChar: TypeAlias = Literal["'", '"']

_QUOTES: Final[dict[int, QuoteChar]] = {
    SINGLE_QUOTE: "'",
    DOUBLE_QUOTE: '"',
}


@dataclass(frozen=True, slots=True)
class TargetRange:
    """Byte range of the quoted region to rewrite, and its opening quote."""

    start: int
    end: int
    quote: QuoteChar


@dataclass(frozen=True, slots=True)
class EmptyInput:
    """The command line is empty; the answer is a fresh double-quoted interpolation."""


@dataclass(frozen=True, slots=True)
class NoMatch:
    """The cursor is not in a quoted region; nothing to rewrite."""

    kind: str | None = None


LocateResult: TypeAlias = TargetRange | EmptyInput | NoMatch


def find_ancestor(node: Node, predicate: Callable[[Node], bool]) -> Node | None:
    """Nearest proper ancestor of ``node`` satisfying ``predicate``."""
    current = node.parent
    while current is not None:
        if predicate(current):
            return current
        current = current.parent
    return None


def _quoted_target(node: Node, text: bytes) -> TargetRange | None:
    quote = _QUOTES.get(text[node.start]) if node.start < len(text) else None
    if quote is None:
        return None
    return TargetRange(node.start, node.end, quote)


def classify(tree: SyntaxTree, node: Node) -> TargetRange | NoMatch:
    """
    Decide whether ``node`` (the innermost node at the cursor) is a quoted
    region. Strings and error nodes qualify when they open with a quote. An
    error node that runs off the end of the line is taken as a string still
    being typed, even when the cursor sits in something nested inside it.
    """
    text = tree.text
    if node.kind_id in (STRING_KIND, ERROR_KIND):
        target = _quoted_target(node, text)
        if target is not None:
            logger.debug("%s node at %d..%d opens with %s", node.kind, node.start, node.end, target.quote)
            return target

    enclosing = find_ancestor(node, lambda n: n.kind_id == ERROR_KIND)
    if enclosing is not None and enclosing.end == len(text):
        target = _quoted_target(enclosing, text)
        if target is not None:
            logger.debug(
                "recovered trailing error node at %d..%d as an unterminated %s string",
                enclosing.start,
                enclosing.end,
                target.quote,
            )
            return target

    logger.debug("%s node at %d..%d is not a quoted region", node.kind, node.start, node.end)
    return NoMatch(node.kind)


def locate(buf: ByteBuffer) -> LocateResult:
    """
    Parse ``buf`` and find the quoted region the cursor is in or touching.

    Raises ParseFailure when the text does not parse and NoTargetFound when
    no node covers the cursor.
    """
    if not buf.text:
        return EmptyInput()

    text = bytes(buf.text)
    tree = parse(text)

    # point lookups see bytes, not the gap after the last one
    effective_pos = buf.cursor - 1 if buf.at_end else buf.cursor

    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, "%s", pretty_print_tree(tree, details=True))
    elif logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s", pretty_print_tree(tree))

    node = tree.innermost_node_containing(effective_pos)
    if node is None:
        raise NoTargetFound.at(
            f"Unable to find node at cursor position {effective_pos}",
            text,
            effective_pos,
        )
    return classify(tree, node)
