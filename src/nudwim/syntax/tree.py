from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

__all__ = ["Node", "SyntaxTree"]


@dataclass(eq=False, slots=True)
class Node:
    """
    One named node of a parsed command line.

    ``start``/``end`` are byte offsets into the text the tree was parsed from
    and mean nothing once that text has been edited.
    """

    kind: str
    kind_id: int
    start: int
    end: int
    parent: Node | None = field(default=None, repr=False)
    children: list[Node] = field(default_factory=list, repr=False)

    def contains(self, pos: int) -> bool:
        return self.start <= pos < self.end

    @property
    def next_sibling(self) -> Node | None:
        return self._sibling(+1)

    @property
    def prev_sibling(self) -> Node | None:
        return self._sibling(-1)

    def _sibling(self, step: int) -> Node | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        idx = next(i for i, n in enumerate(siblings) if n is self) + step
        return siblings[idx] if 0 <= idx < len(siblings) else None


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    text: bytes
    root: Node

    def innermost_node_containing(self, pos: int) -> Node | None:
        """Deepest node whose byte range holds ``pos``; None if ``pos`` is outside the text."""
        if not self.root.contains(pos):
            return None
        node = self.root
        while True:
            child = next((c for c in node.children if c.contains(pos)), None)
            if child is None:
                return node
            node = child

    def walk(self) -> Iterator[tuple[int, Node]]:
        """Pre-order (depth, node) pairs."""
        stack: list[tuple[int, Node]] = [(0, self.root)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, c) for c in reversed(node.children))
