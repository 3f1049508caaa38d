"""Expression tree for propositional formulas.

Every node is an immutable dataclass, so structurally equal sub-expressions
compare and hash equal; the truth-table evaluator relies on that for
memoisation and the rewriting engine for strict matching. A node's hash is
computed once from its children's, so deep trees hash in constant time.

Expressions are totally ordered: first by variant, in the order

    Pattern < Binding < Binary < Not < Group < Primary

and then by their children from left to right, with atoms ordered by their
interned index. Sorting is only used to lay out truth-table columns
deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Union


class BinOperator(Enum):
    AND = "&"
    OR = "|"
    ARROW = "->"
    TWIN_ARROW = "<->"

    @property
    def rank(self) -> int:
        return _OPERATOR_RANK[self]

    def __str__(self) -> str:
        return self.value


_OPERATOR_RANK = {op: i for i, op in enumerate(BinOperator)}

# Variant tags, lowest sorts first
_PATTERN, _BINDING, _BINARY, _NOT, _GROUP, _PRIMARY = range(6)
_EQUIVALENCE, _RULE_ID = range(2)


class _Ordered:
    __slots__ = ()

    def __post_init__(self):
        # Children already hold their hash, so hashing a node is O(1)
        values = tuple(getattr(self, f.name) for f in fields(self))
        object.__setattr__(self, "_hash", hash((type(self).__name__, values)))

    def _cached_hash(self) -> int:
        return self._hash

    def sort_key(self) -> tuple:
        raise NotImplementedError

    def __lt__(self, other):
        if not isinstance(other, _Ordered):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other):
        if not isinstance(other, _Ordered):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other):
        if not isinstance(other, _Ordered):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other):
        if not isinstance(other, _Ordered):
            return NotImplemented
        return self.sort_key() >= other.sort_key()


def _node(cls):
    """Frozen dataclass whose hash is computed once, at construction."""
    cls = dataclass(frozen=True)(cls)
    cls.__hash__ = _Ordered._cached_hash
    return cls


class Expr(_Ordered):
    """Base class of all expression nodes."""
    __slots__ = ()


class Rule(_Ordered):
    """Base class of the two rule forms."""
    __slots__ = ()


@_node
class Primary(Expr):
    """Leaf referencing an interned atom."""
    index: int

    def sort_key(self) -> tuple:
        return (_PRIMARY, self.index)


@_node
class Not(Expr):
    operand: Expr

    def sort_key(self) -> tuple:
        return (_NOT, self.operand.sort_key())


@_node
class Group(Expr):
    """Parenthesised sub-expression: transparent to evaluation, visible to matching."""
    inner: Expr

    def sort_key(self) -> tuple:
        return (_GROUP, self.inner.sort_key())


@_node
class Binary(Expr):
    left: Expr
    op: BinOperator
    right: Expr

    def sort_key(self) -> tuple:
        return (_BINARY, self.left.sort_key(), self.op.rank, self.right.sort_key())


@_node
class Equivalence(Rule):
    """Inline rule ``lhs = rhs``."""
    lhs: Expr
    rhs: Expr

    def sort_key(self) -> tuple:
        return (_EQUIVALENCE, self.lhs.sort_key(), self.rhs.sort_key())


@_node
class RuleId(Rule):
    """Reference to a rule bound earlier in the session, by atom index of its name."""
    index: int

    def sort_key(self) -> tuple:
        return (_RULE_ID, self.index)


@_node
class Pattern(Expr):
    """``expr => rule``: a request to rewrite ``expr``."""
    expr: Expr
    rule: Rule

    def sort_key(self) -> tuple:
        return (_PATTERN, self.expr.sort_key(), self.rule.sort_key())


@_node
class Binding(Expr):
    """``name := lhs = rhs``: a request to store ``rule`` under ``target``'s name."""
    target: Primary
    rule: Rule

    def sort_key(self) -> tuple:
        return (_BINDING, self.target.sort_key(), self.rule.sort_key())


# Nodes allowed in a plain formula (and in either side of a rule)
Formula = Union[Primary, Not, Group, Binary]
