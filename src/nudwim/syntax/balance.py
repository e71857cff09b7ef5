from __future__ import annotations

from collections.abc import Iterator

from lark import Token
from lark.lark import PostLex

__all__ = ["ParenBalancer"]


class ParenBalancer(PostLex):
    """
    Post-lexer that keeps half-typed command lines parseable.

    A ``)`` with no open ``(`` is retyped STRAY_RPAR, and every ``(`` still
    open at the end of input gets a zero-width UNCLOSED token, so both reach
    the parser as ``error`` nodes instead of failing the parse.
    """

    OPEN_type = "LPAR"
    CLOSE_type = "RPAR"
    STRAY_CLOSE_type = "STRAY_RPAR"
    UNCLOSED_type = "UNCLOSED"

    # the contextual lexer must produce ")" even where only STRAY_RPAR fits
    always_accept = (CLOSE_type,)

    def process(self, stream: Iterator[Token]) -> Iterator[Token]:
        depth = 0
        token = None
        for token in stream:
            if token.type == self.OPEN_type:
                depth += 1
            elif token.type == self.CLOSE_type:
                if depth == 0:
                    token = Token.new_borrow_pos(self.STRAY_CLOSE_type, token.value, token)
                else:
                    depth -= 1
            yield token

        for _ in range(depth):
            # token is not None here: depth > 0 means at least one "(" was seen
            yield Token.new_borrow_pos(self.UNCLOSED_type, "", token)
