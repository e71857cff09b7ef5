from __future__ import annotations

from collections.abc import Iterable

from lark import Lark

from nudwim.errors import UnknownNodeKind

__all__ = ["NodeKinds"]

# Grammar rule names that are reported under a different kind name
_KIND_ALIASES: dict[str, str] = {
    "error": "ERROR",
}


class NodeKinds:
    """
    Stable small-integer ids for the node kinds of one compiled grammar.

    Ids are assigned in sorted name order starting at 1, so they only change
    when the grammar's rule set does. 0 is never a valid id.
    """

    def __init__(self, names: Iterable[str]):
        ordered = sorted(set(names))
        self._ids: dict[str, int] = {name: i for i, name in enumerate(ordered, start=1)}
        self._names: dict[int, str] = {i: name for name, i in self._ids.items()}

    @classmethod
    def from_parser(cls, parser: Lark) -> NodeKinds:
        names: set[str] = set()
        for rule in parser.rules:
            name = str(rule.origin.name)
            # inlined helpers (`_expr`) and lark's generated `__*` rules never become nodes
            if name.startswith("_"):
                continue
            names.add(_KIND_ALIASES.get(name, name))
        return cls(names)

    @staticmethod
    def kind_name(rule_name: str) -> str:
        return _KIND_ALIASES.get(rule_name, rule_name)

    def id_for(self, name: str) -> int:
        try:
            return self._ids[name]
        except KeyError:
            raise UnknownNodeKind(name, self.names) from None

    def name_for(self, kind_id: int) -> str:
        return self._names[kind_id]

    @property
    def names(self) -> list[str]:
        return list(self._ids)
