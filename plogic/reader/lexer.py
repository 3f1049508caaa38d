"""
  Formula lexer

- Single pass over a compiled TOKEN_RE, never aborts mid-line
- Emits (kind, text) tuples, see plogic.types.token
- Keyword spellings (and, or, not, implies, equiv, rule) share the kind of
  their symbolic counterpart
- `ans` re-lexes the previous input in place when one exists, otherwise it is
  an ordinary atom
- Unrecognised or malformed characters are recorded as LexDiagnostic values
  and skipped, so the parser can still report a coherent error downstream
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

from plogic import Token
from plogic.types import token as tk

logger = logging.getLogger(__name__)

# Group names of the well-formed operators are their token kinds
TOKEN_RE = re.compile(
    r"(?P<whitespace>[ \t\n]+)"
    r"|(?P<twin_arrow><->)"
    r"|(?P<arrow>->)"
    r"|(?P<rule>=>)"
    r"|(?P<bind>:=)"
    r"|(?P<equal>=)"
    r"|(?P<single>[&|~()])"
    r"|(?P<word>[A-Za-z]+)"
    # malformed digraphs swallow the character that broke them
    r"|(?P<broken_twin><-?(?P<twin_found>.?))"
    r"|(?P<broken_pair>[-:](?P<pair_found>.?))"
    r"|(?P<error>.)",
    re.DOTALL,
)

_OPERATORS = {tk.TWIN_ARROW, tk.ARROW, tk.RULE, tk.BIND, tk.EQUAL}

# Second character expected after a lone '-' or ':'
_PAIR_EXPECTS = {"-": ">", ":": "="}


@dataclass(frozen=True)
class LexDiagnostic:
    position: int
    message: str

    def __str__(self):
        return f"{self.message} (at {self.position})"


def lex(
    source: str,
    previous: str = "",
    diagnostics: list[LexDiagnostic] | None = None,
) -> Iterator[Token]:
    """Token generator: yields (kind, text) tuples."""
    pos = 0
    n = len(source)

    def report(at: int, message: str) -> None:
        diag = LexDiagnostic(at, message)
        logger.debug("lexical diagnostic: %s", diag)
        if diagnostics is not None:
            diagnostics.append(diag)

    while pos < n:
        # the `error` group matches any character, so there is always a match
        m = TOKEN_RE.match(source, pos)
        kind = m.lastgroup
        text = m.group(kind)
        start, pos = pos, m.end()

        if kind == "whitespace":
            continue

        if kind in _OPERATORS:
            yield kind, text
        elif kind == "single":
            yield tk.SINGLE_CHAR[text], text
        elif kind == "word":
            if text == tk.ANS and previous:
                # The previous input is lexed without a previous input of its own
                yield from lex(previous, "", diagnostics)
            elif text in tk.KEYWORDS:
                yield tk.KEYWORDS[text], text
            else:
                yield tk.IDENTIFIER, text
        elif kind == "broken_twin":
            found = m.group("twin_found") or None
            report(start, f"Unexpected character: incomplete '<->', found {found!r}")
        elif kind == "broken_pair":
            head, found = text[0], m.group("pair_found") or None
            report(
                start,
                f"Unexpected character: expected '{_PAIR_EXPECTS[head]}' after '{head}', "
                f"but found {found!r}",
            )
        else:
            report(start, f"Unexpected character: {text!r}")


def tokenize(
    source: str,
    previous: str = "",
    diagnostics: list[LexDiagnostic] | None = None,
) -> list[Token]:
    """Eagerly lex `source` into a list of tokens."""
    return list(lex(source, previous, diagnostics))
