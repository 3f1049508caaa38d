"""Token kinds produced by the lexer.

Tokens are ``(kind, text)`` tuples. ``text`` is the identifier name for
``IDENTIFIER`` tokens and the source spelling (symbol or keyword) otherwise;
the parser only ever dispatches on ``kind``.
"""

from __future__ import annotations

IDENTIFIER = "identifier"
NOT = "not"                 # ~  not
AND = "and"                 # &  and
OR = "or"                   # |  or
ARROW = "arrow"             # -> implies
TWIN_ARROW = "twin_arrow"   # <-> equiv
RULE = "rule"               # => rule
BIND = "bind"               # :=
EQUAL = "equal"             # =
LPAREN = "lparen"           # (
RPAREN = "rparen"           # )

# Keyword spellings normalise to the same kind as their symbolic counterpart
KEYWORDS: dict[str, str] = {
    "and": AND,
    "or": OR,
    "not": NOT,
    "implies": ARROW,
    "equiv": TWIN_ARROW,
    "rule": RULE,
}

SINGLE_CHAR: dict[str, str] = {
    "&": AND,
    "|": OR,
    "~": NOT,
    "(": LPAREN,
    ")": RPAREN,
}

# The identifier that re-injects the previous input
ANS = "ans"


def describe(token) -> str:
    """Human readable form of a token for diagnostics."""
    if token is None:
        return "end of input"
    kind, text = token
    if kind == IDENTIFIER:
        return f"identifier {text!r}"
    return repr(text)
