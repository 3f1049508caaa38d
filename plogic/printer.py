"""Rendering of formulas, rules and truth tables back to text."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from plogic.types.expr import (
    Binary,
    Binding,
    Equivalence,
    Expr,
    Group,
    Not,
    Pattern,
    Primary,
    Rule,
    RuleId,
)
from plogic.types.symbol_table import SymbolTable

if TYPE_CHECKING:
    from plogic.evaluation.truth_table import TruthTable

# ----------------- Glyphs -----------------
GLYPHS = {
    "bits": ("0", "1"),
    "bool": ("F", "T"),
}

USAGE = """\
Usage:
   -------------------
   | And     |  '&'  |
   | Or      |  '|'  |
   | Not     |  '~'  |
   | Cond    |  '->' |
   | Bi-Cond | '<->' |
   -------------------
   ---------------------------
   | Rule       |    '=>'    |
   | Binding    |    ':='    |
   | Derivation | f => l = r |
   ---------------------------
   - help:   usage info
   - toggle: switch between 0/1 and F/T
   - ans:    previous answer
   - quit:   exit repl"""


def format_rule(rule: Rule, symbols: SymbolTable) -> str:
    match rule:
        case Equivalence(lhs, rhs):
            return f"{format_expr(lhs, symbols)} = {format_expr(rhs, symbols)}"
        case RuleId(index):
            return symbols.name(index)
    raise TypeError(f"Not a rule: {rule!r}")


def format_expr(expr: Expr, symbols: SymbolTable) -> str:
    """
    Render `expr` in surface syntax. Group nodes keep their parentheses, and a
    Binary child that would otherwise re-parse differently (under `~`, under a
    tighter operator, or right of its own operator) is parenthesised too.
    Trees built by rule substitution rely on the latter.
    """
    match expr:
        case Primary(index):
            return symbols.name(index)
        case Not(operand):
            return f"~{_operand(operand, symbols, isinstance(operand, Binary))}"
        case Group(inner):
            return f"({format_expr(inner, symbols)})"
        case Binary(left, op, right):
            left_text = _operand(
                left, symbols, isinstance(left, Binary) and left.op.rank > op.rank
            )
            right_text = _operand(
                right, symbols, isinstance(right, Binary) and right.op.rank >= op.rank
            )
            return f"{left_text} {op} {right_text}"
        case Pattern(target, rule):
            return f"{format_expr(target, symbols)} => {format_rule(rule, symbols)}"
        case Binding(target, rule):
            return f"{format_expr(target, symbols)} := {format_rule(rule, symbols)}"
    raise TypeError(f"Not an expression: {expr!r}")


def _operand(expr: Expr, symbols: SymbolTable, wrap: bool) -> str:
    text = format_expr(expr, symbols)
    return f"({text})" if wrap else text


def format_table(table: TruthTable, display: str = "bits") -> str:
    """
    Lay the table out one column per displayed sub-expression, atoms first.
    Each value is centred under its ``[ formula ]`` header.
    """
    zero, one = GLYPHS[display]
    columns = table.columns()
    headers = [f"[ {format_expr(expr, table.symbols)} ] " for expr, _ in columns]
    total = sum(len(h) for h in headers)

    with StringIO() as buffer:
        buffer.write("-" * (total - 1) + "\n")
        buffer.write("".join(headers) + "\n")
        buffer.write("".join(f"|{'-' * (len(h) - 3)}| " for h in headers) + "\n")
        for i in range(table.rows):
            for (_, bits), head in zip(columns, headers):
                width = len(head)
                glyph = one if bits[i] else zero
                left_pad = width // 2 - 2
                right_pad = left_pad if width % 2 == 0 else left_pad + 1
                buffer.write(f"|{' ' * left_pad}{glyph}{' ' * right_pad}| ")
            buffer.write("\n")
        buffer.write("-" * (total - 1))
        return buffer.getvalue()


def usage() -> str:
    return USAGE
