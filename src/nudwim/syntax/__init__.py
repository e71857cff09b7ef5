"""
nudwim.syntax
=============

The command-line grammar and the byte-ranged tree it parses into.
"""

from __future__ import annotations

from nudwim.syntax.parse import KINDS, kind_id, parse
from nudwim.syntax.tree import Node, SyntaxTree

__all__ = ["KINDS", "Node", "SyntaxTree", "kind_id", "parse"]
