from __future__ import annotations

import logging
from itertools import accumulate

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from nudwim.errors import ParseFailure
from nudwim.logs import TRACE
from nudwim.syntax.balance import ParenBalancer
from nudwim.syntax.grammar import NU_GRAMMAR
from nudwim.syntax.kinds import NodeKinds
from nudwim.syntax.tree import Node, SyntaxTree

__all__ = ["KINDS", "kind_id", "parse"]

logger = logging.getLogger(__name__)

_PARSER = Lark(
    NU_GRAMMAR,
    start="start",
    parser="lalr",
    propagate_positions=True,
    lexer="contextual",
    postlex=ParenBalancer(),
    cache=False,
)

KINDS = NodeKinds.from_parser(_PARSER)


def kind_id(name: str) -> int:
    """Resolve a node kind name against the grammar; unknown names raise UnknownNodeKind."""
    return KINDS.id_for(name)


def _byte_offsets(text: str) -> list[int]:
    # offsets[i] is the byte offset of character i; offsets[len(text)] is the byte length.
    # Under surrogateescape every undecodable byte is one character of one byte.
    return [0, *accumulate(len(ch.encode("utf-8", errors="surrogateescape")) for ch in text)]


def _build(tree: Tree[Token], parent: Node | None, offsets: list[int]) -> Node:
    rule_name = str(tree.data)
    kind = NodeKinds.kind_name(rule_name)
    if tree.meta.empty:
        start = end = 0
    else:
        start, end = offsets[tree.meta.start_pos], offsets[tree.meta.end_pos]
    if any(isinstance(c, Token) and c.type == ParenBalancer.UNCLOSED_type for c in tree.children):
        # an unclosed "(" holds everything up to the end of the line
        end = offsets[-1]
    node = Node(kind=kind, kind_id=KINDS.id_for(kind), start=start, end=end, parent=parent)
    for child in tree.children:
        # tokens are anonymous leaves; only rules that matched some text become nodes
        if isinstance(child, Tree) and not child.meta.empty:
            built = _build(child, node, offsets)
            node.children.append(built)
            node.end = max(node.end, built.end)
    return node


def parse(data: bytes) -> SyntaxTree:
    """
    Parse a command line. The tree's ranges are byte offsets into ``data``.

    Unbalanced parentheses and unterminated quotes come back as ERROR nodes,
    so any line parses; ParseFailure is raised only if lark rejects the text
    anyway.
    """
    data = bytes(data)
    text = data.decode("utf-8", errors="surrogateescape")
    offsets = _byte_offsets(text)
    try:
        lark_tree = _PARSER.parse(text)
    except UnexpectedInput as e:
        pos = getattr(e, "pos_in_stream", None)
        if pos is None or pos < 0 or pos >= len(text):
            pos = max(len(text) - 1, 0)
        raise ParseFailure.at(
            "Unable to parse command line",
            data,
            offsets[pos],
            notes=[f"{type(e).__name__} at character {pos}"],
        ) from e

    root = _build(lark_tree, None, offsets)
    # the root always spans the whole line, leading and trailing whitespace included
    root.start, root.end = 0, len(data)
    logger.log(TRACE, "parsed %d bytes into %d top-level nodes", len(data), len(root.children))
    return SyntaxTree(text=data, root=root)
