"""Structural pattern matching and substitution.

A rule ``lhs = rhs`` is applied to an expression in two single-pass steps:

1. ``traverse_and_match`` walks the expression and ``lhs`` in lock-step and
   binds every atom of ``lhs`` to the sub-expression found at its position.
   Binary nodes must carry the same operator, Not/Group nodes must meet their
   own kind. A mismatch is recorded and matching carries on with the sibling
   branches; there is no backtracking and no search for other match sites.
2. ``substitute_in`` rebuilds ``rhs`` with every atom replaced by its binding.

By default the first binding of an atom wins and later occurrences are not
checked against it. With ``strict=True`` a later occurrence must bind to a
structurally equal sub-expression, and any mismatch fails the rewrite.

Nothing here checks that ``lhs`` and ``rhs`` are logically equivalent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from plogic.errors import (
    PlogicPatternMismatchError,
    PlogicRewriteError,
    PlogicUnboundPatternError,
)
from plogic.printer import format_expr
from plogic.rewriting.rule_store import RuleStore
from plogic.types.expr import (
    Binary,
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

logger = logging.getLogger(__name__)

MISMATCH_MESSAGE = "Expression does not match pattern"
UNBOUND_MESSAGE = "Pattern could not be found in expression or left hand side"


@dataclass(frozen=True)
class Mismatch:
    """One branch where the expression and the rule's left hand side disagree."""
    pattern: Expr
    found: Expr
    reason: str

    def describe(self, symbols: SymbolTable) -> str:
        return f"{MISMATCH_MESSAGE} ({self.reason}): {format_expr(self.found, symbols)}"


@dataclass
class MatchResult:
    bindings: dict[int, Expr] = field(default_factory=dict)
    mismatches: list[Mismatch] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.mismatches


class RewriteStatus(Enum):
    OK = "ok"
    MISMATCH = "mismatch"
    UNBOUND = "unbound"


@dataclass
class Rewrite:
    status: RewriteStatus
    expr: Expr | None = None
    mismatches: list[Mismatch] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is RewriteStatus.OK

    def unwrap(self) -> Expr:
        """Return the rewritten expression or raise the error matching the status."""
        if self.status is RewriteStatus.OK:
            return self.expr
        if self.status is RewriteStatus.MISMATCH:
            raise PlogicPatternMismatchError(MISMATCH_MESSAGE, self.mismatches)
        raise PlogicUnboundPatternError(UNBOUND_MESSAGE, self.mismatches)


def traverse_and_match(expr: Expr, lhs: Expr, strict: bool = False) -> MatchResult:
    """Bind the atoms of `lhs` to the sub-expressions of `expr` at the same positions."""
    result = MatchResult()
    _match(expr, lhs, result, strict)
    return result


def _mismatch(result: MatchResult, pattern: Expr, found: Expr, reason: str) -> None:
    logger.debug("%s (%s): %r", MISMATCH_MESSAGE, reason, found)
    result.mismatches.append(Mismatch(pattern, found, reason))


def _match(expr: Expr, lhs: Expr, result: MatchResult, strict: bool) -> None:
    match lhs:
        case Primary(index):
            bound = result.bindings.get(index)
            if bound is None:
                result.bindings[index] = expr
            elif strict and bound != expr:
                _mismatch(result, lhs, expr, "inconsistent binding")
        case Binary(p_left, p_op, p_right):
            if not isinstance(expr, Binary):
                _mismatch(result, lhs, expr, f"expected '{p_op}'")
            elif expr.op is not p_op:
                _mismatch(result, lhs, expr, f"expected '{p_op}', found '{expr.op}'")
            else:
                _match(expr.left, p_left, result, strict)
                _match(expr.right, p_right, result, strict)
        case Not(p_operand):
            if isinstance(expr, Not):
                _match(expr.operand, p_operand, result, strict)
            else:
                _mismatch(result, lhs, expr, "expected negation")
        case Group(p_inner):
            if isinstance(expr, Group):
                _match(expr.inner, p_inner, result, strict)
            else:
                _mismatch(result, lhs, expr, "expected parentheses")
        case _:
            raise TypeError(f"{type(lhs).__name__} cannot appear in a rule")


def substitute_in(rhs: Expr, bindings: dict[int, Expr]) -> Expr:
    """Rebuild `rhs` with its atoms replaced by their bindings."""
    match rhs:
        case Primary(index):
            try:
                return bindings[index]
            except KeyError:
                raise PlogicUnboundPatternError(UNBOUND_MESSAGE) from None
        case Binary(left, op, right):
            return Binary(substitute_in(left, bindings), op, substitute_in(right, bindings))
        case Not(operand):
            return Not(substitute_in(operand, bindings))
        case Group(inner):
            return Group(substitute_in(inner, bindings))
    raise TypeError(f"{type(rhs).__name__} cannot appear in a rule")


def rewrite(expr: Expr, rule: Equivalence, strict: bool = False) -> Rewrite:
    """Match `expr` against `rule.lhs` and substitute into `rule.rhs`."""
    matched = traverse_and_match(expr, rule.lhs, strict)
    if strict and not matched.ok:
        return Rewrite(RewriteStatus.MISMATCH, mismatches=matched.mismatches)
    try:
        result = substitute_in(rule.rhs, matched.bindings)
    except PlogicUnboundPatternError:
        return Rewrite(RewriteStatus.UNBOUND, mismatches=matched.mismatches)
    return Rewrite(RewriteStatus.OK, result, matched.mismatches)


def resolve_rule(rule: Rule, symbols: SymbolTable, rules: RuleStore) -> Equivalence:
    """An inline rule stands for itself; a rule name is looked up in the store."""
    if isinstance(rule, RuleId):
        return rules.lookup(symbols.name(rule.index))
    return rule


def rewrite_pattern(
    pattern: Pattern,
    symbols: SymbolTable,
    rules: RuleStore,
    strict: bool = False,
) -> Rewrite:
    """Apply a (possibly chained) Pattern, innermost rule first.

    Mismatches from every step are accumulated; the first failing step ends
    the chain. Raises PlogicUndefinedRuleError for an unknown rule name.
    """
    target = pattern.expr
    mismatches: list[Mismatch] = []
    if isinstance(target, Pattern):
        inner = rewrite_pattern(target, symbols, rules, strict)
        if not inner.ok:
            return inner
        target = inner.expr
        mismatches.extend(inner.mismatches)
    step = rewrite(target, resolve_rule(pattern.rule, symbols, rules), strict)
    step.mismatches[:0] = mismatches
    return step


def apply_rule(
    expr: Expr,
    rule: Rule,
    symbols: SymbolTable,
    rules: RuleStore | None = None,
    strict: bool = False,
) -> str:
    """Rewrite `expr` with `rule` and render the result.

    Raises a PlogicRewriteError subclass when the rule is unknown, the match
    fails in strict mode, or the right hand side uses an unbound atom.
    """
    if rules is None:
        rules = RuleStore()
    outcome = rewrite_pattern(Pattern(expr, rule), symbols, rules, strict)
    try:
        return format_expr(outcome.unwrap(), symbols)
    except PlogicRewriteError:
        logger.debug("rewrite failed with %d mismatch(es)", len(outcome.mismatches))
        raise
