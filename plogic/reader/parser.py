"""
  Formula parser

Recursive descent with one function per precedence level, highest binding
power first:

    primary      := IDENTIFIER | '(' twin_arrow ')'
    not          := '~' not | primary
    and          := not ('&' not)*
    or           := and ('|' and)*
    arrow        := or ('->' or)*
    twin_arrow   := arrow ('<->' arrow)*
    statement    := twin_arrow ':=' twin_arrow '=' twin_arrow
                  | twin_arrow ('=>' twin_arrow '=' twin_arrow)* ['=>' IDENTIFIER]

All binary connectives are left associative. Atom names are interned into the
SymbolTable handed to the stream, so repeated names share one index.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from plogic import Token
from plogic.errors import PlogicSyntaxError
from plogic.printer import format_expr
from plogic.types import token as tk
from plogic.types.expr import (
    BinOperator,
    Binary,
    Binding,
    Equivalence,
    Expr,
    Group,
    Not,
    Pattern,
    Primary,
    RuleId,
)
from plogic.types.symbol_table import SymbolTable


# Binary precedence levels, loosest first; each level's operands come from the next
_LEVELS: tuple[tuple[str, BinOperator], ...] = (
    (tk.TWIN_ARROW, BinOperator.TWIN_ARROW),
    (tk.ARROW, BinOperator.ARROW),
    (tk.OR, BinOperator.OR),
    (tk.AND, BinOperator.AND),
)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token], symbols: SymbolTable | None = None):
        self.tokens: Iterator[Token] = iter(token_iter)
        self.buffer: list[Token] = []
        self.symbols: SymbolTable = symbols if symbols is not None else SymbolTable()

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def peek_kind(self) -> Optional[str]:
        tok = self.peek()
        return tok[0] if tok is not None else None

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    # ------------------------
    # Statement layer
    # ------------------------
    def parse_statement(self) -> Expr:
        left = self.parse_twin_arrow()

        if self.peek_kind() == tk.BIND:
            if not isinstance(left, Primary):
                raise PlogicSyntaxError(
                    f"Can only bind rule to identifier, found {self._render(left)}"
                )
            self.advance()
            eq_lhs = self.parse_twin_arrow()
            if self.peek_kind() != tk.EQUAL:
                raise PlogicSyntaxError("Expected '=' in pattern expression")
            self.advance()
            eq_rhs = self.parse_twin_arrow()
            return Binding(left, Equivalence(eq_lhs, eq_rhs))

        while self.peek_kind() == tk.RULE:
            self.advance()
            eq_lhs = self.parse_twin_arrow()
            nxt = self.peek()
            if nxt is None:
                # `formula => name` refers to a bound rule and ends the statement
                if isinstance(eq_lhs, Primary):
                    return Pattern(left, RuleId(eq_lhs.index))
                raise PlogicSyntaxError(
                    f"Expected rule identifier name, but got {self._render(eq_lhs)}"
                )
            if nxt[0] != tk.EQUAL:
                raise PlogicSyntaxError(
                    "Expected '=' in pattern expression or rule identifier, "
                    f"found {tk.describe(nxt)}"
                )
            self.advance()
            eq_rhs = self.parse_twin_arrow()
            left = Pattern(left, Equivalence(eq_lhs, eq_rhs))
        return left

    # ------------------------
    # Binary levels
    # ------------------------
    def parse_twin_arrow(self) -> Expr:
        return self._parse_level(0)

    def _parse_level(self, level: int) -> Expr:
        if level == len(_LEVELS):
            return self.parse_not()
        kind, op = _LEVELS[level]
        left = self._parse_level(level + 1)
        while self.peek_kind() == kind:
            self.advance()
            right = self._parse_level(level + 1)
            left = Binary(left, op, right)
        return left

    def parse_not(self) -> Expr:
        if self.peek_kind() == tk.NOT:
            self.advance()
            return Not(self.parse_not())
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        tok = self.advance()
        if tok is None:
            raise PlogicSyntaxError("Unexpected token: end of input")
        kind, text = tok
        if kind == tk.IDENTIFIER:
            return Primary(self.symbols.intern(text))
        if kind == tk.LPAREN:
            inner = self.parse_twin_arrow()
            if self.peek_kind() != tk.RPAREN:
                raise PlogicSyntaxError("Missing closing parenthesis")
            self.advance()
            return Group(inner)
        raise PlogicSyntaxError(f"Unexpected token: {tk.describe(tok)}")

    def _render(self, expr: Expr) -> str:
        return format_expr(expr, self.symbols)


def parse(tokens: Iterable[Token], symbols: SymbolTable | None = None) -> Expr:
    """Parse one complete statement; trailing tokens are an error."""
    stream = TokenStream(tokens, symbols)
    result = stream.parse_statement()
    trailing = stream.peek()
    if trailing is not None:
        raise PlogicSyntaxError(
            f"Unexpected token, expected end of input: {tk.describe(trailing)}"
        )
    return result
