from __future__ import annotations

import logging

from plogic import Token
from plogic.errors import PlogicRewriteError, PlogicSyntaxError
from plogic.evaluation.truth_table import generate_table
from plogic.printer import format_expr, format_rule, format_table
from plogic.reader.lexer import LexDiagnostic, lex
from plogic.reader.parser import parse
from plogic.results import (
    BindingAck,
    CoreResult,
    Diagnostic,
    RewriteResult,
    TableResult,
)
from plogic.rewriting.matcher import rewrite_pattern
from plogic.session import Session
from plogic.types.expr import Binding, Pattern
from plogic.types.symbol_table import SymbolTable

logger = logging.getLogger(__name__)

NESTING_MESSAGE = "formula nested too deeply"


def process(line: str, session: Session) -> CoreResult:
    """
    Lex, parse and run one input line against `session`.

    A bare formula yields its truth table, `f => rule` the rewritten formula,
    `name := lhs = rhs` stores a rule. Syntax and rewrite errors come back as
    a Diagnostic, as does a formula nested beyond the interpreter's recursion
    limit; only internal errors propagate.
    """
    lex_diagnostics: list[LexDiagnostic] = []
    tokens = list(lex(line, session.previous, lex_diagnostics))
    notes = [str(d) for d in lex_diagnostics]
    try:
        return _run(tokens, session, notes)
    except RecursionError:
        logger.debug("recursion limit reached on %d tokens", len(tokens))
        return Diagnostic("syntax", NESTING_MESSAGE, notes=notes)


def _run(tokens: list[Token], session: Session, notes: list[str]) -> CoreResult:
    # Fresh symbol table per line
    symbols = SymbolTable()
    try:
        expr = parse(tokens, symbols)
    except PlogicSyntaxError as e:
        return Diagnostic("syntax", str(e), notes=notes)

    match expr:
        case Binding(target, rule):
            name = symbols.name(target.index)
            text = f"{name} := {format_rule(rule, symbols)}"
            session.rules.bind(name, rule)
            return BindingAck(name, text, notes=notes)

        case Pattern():
            try:
                outcome = rewrite_pattern(expr, symbols, session.rules, session.strict)
                notes.extend(m.describe(symbols) for m in outcome.mismatches)
                result = outcome.unwrap()
            except PlogicRewriteError as e:
                return Diagnostic("rewrite", str(e), notes=notes)
            text = format_expr(result, symbols)
            session.previous = text
            return RewriteResult(text, notes=notes)

    table = generate_table(expr, symbols)
    text = format_expr(expr, symbols)
    session.previous = text
    return TableResult(table, text, notes=notes)


def render(result: CoreResult, session: Session) -> str:
    """Text the REPL shows for `result`, notes first."""
    lines = list(result.notes)
    match result:
        case TableResult(table=table):
            lines.append(format_table(table, session.display.value))
        case RewriteResult(text=text):
            lines.append(text)
        case BindingAck(text=text):
            lines.append(f"bound {text}")
        case Diagnostic(message=message):
            lines.append(message)
    return "\n".join(lines)


class Interpreter:
    """
    Holds a Session across calls so bound rules and `ans` persist between
    lines, the way the REPL uses the core.
    """

    def __init__(self, session: Session | None = None):
        self.session: Session = session if session is not None else Session.from_env()

    def eval(self, line: str) -> CoreResult:
        return process(line, self.session)

    def eval_text(self, line: str) -> str:
        return render(self.eval(line), self.session)
