"""
Human-readable dumps of a parsed command line, for DEBUG/TRACE logging only.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree as RichTree

from nudwim.syntax.tree import Node, SyntaxTree

__all__ = ["pretty_print_tree"]


def _label(node: Node, text: bytes, details: bool) -> str:
    excerpt = text[node.start : node.end].decode("utf-8", errors="replace")
    label = f"[bold]{escape(node.kind)}[/bold] {escape(repr(excerpt))}"
    if details:
        label += f" [dim](kind_id: {node.kind_id}, byte {node.start}-{node.end})[/dim]"
    return label


def pretty_print_tree(tree: SyntaxTree, details: bool = False, width: int = 100) -> str:
    """Render ``tree`` as an indented outline; ``details`` adds kind ids and byte ranges."""
    rendered: dict[int, RichTree] = {}
    top: RichTree | None = None
    for _, node in tree.walk():
        label = _label(node, tree.text, details)
        if node.parent is None:
            top = RichTree(f"Parse results: {label}")
            rendered[id(node)] = top
        else:
            rendered[id(node)] = rendered[id(node.parent)].add(label)

    console = Console(width=width, color_system=None, force_terminal=False)
    with console.capture() as capture:
        console.print(top)
    return capture.get()
