"""Truth-table evaluator.

Enumerates the 2^k assignments of a formula's k distinct atoms and computes a
bit column for every distinct sub-expression. Columns are numpy uint8 arrays
of length 2^k, so each connective is a single vectorised operation.

Atoms are sorted by the expression order (i.e. by interned index) and atom j
toggles every 2^j rows, atom 0 being the fastest. Row 0 is all zeros.

Memory grows with 2^k; nothing bounds k besides available memory.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from plogic import Bits
from plogic.errors import PlogicEvaluationError
from plogic.types.expr import (
    BinOperator,
    Binary,
    Expr,
    Group,
    Not,
    Primary,
)
from plogic.types.symbol_table import SymbolTable


def _implies(a: Bits, b: Bits) -> Bits:
    return (1 - a) | b


def _equiv(a: Bits, b: Bits) -> Bits:
    return (a == b).astype(np.uint8)


_OPERATIONS = {
    BinOperator.AND: np.bitwise_and,
    BinOperator.OR: np.bitwise_or,
    BinOperator.ARROW: _implies,
    BinOperator.TWIN_ARROW: _equiv,
}


def atom_column(j: int, rows: int) -> Bits:
    """Column of atom j: 1 in row i iff (i mod 2^(j+1)) + 1 > 2^(j+1) / 2."""
    return ((np.arange(rows) >> j) & 1).astype(np.uint8)


def collect_atoms(expr: Expr) -> list[Primary]:
    """Distinct atoms of a pure formula, in the expression order."""
    seen: set[Primary] = set()
    stack = [expr]
    while stack:
        node = stack.pop()
        match node:
            case Primary():
                seen.add(node)
            case Not(operand):
                stack.append(operand)
            case Group(inner):
                stack.append(inner)
            case Binary(left, _, right):
                stack.append(right)
                stack.append(left)
            case _:
                raise PlogicEvaluationError(
                    f"Cannot evaluate {type(node).__name__}; only pure formulas have truth tables"
                )
    return sorted(seen)


class TruthTable:
    """Bit columns for every distinct sub-expression of one formula."""

    __slots__ = ("expr", "symbols", "atoms", "rows", "_memo")

    def __init__(self, expr: Expr, symbols: SymbolTable):
        self.expr = expr
        self.symbols = symbols
        self.atoms: list[Primary] = collect_atoms(expr)
        self.rows: int = 2 ** len(self.atoms)
        self._memo: dict[Expr, Bits] = {
            atom: atom_column(j, self.rows) for j, atom in enumerate(self.atoms)
        }
        self._eval(expr)

    def _eval(self, expr: Expr) -> Bits:
        cached = self._memo.get(expr)
        if cached is not None:
            return cached
        match expr:
            case Not(operand):
                res = (1 - self._eval(operand)).astype(np.uint8)
            case Group(inner):
                res = self._eval(inner)
            case Binary(left, op, right):
                res = _OPERATIONS[op](self._eval(left), self._eval(right)).astype(np.uint8)
            case _:
                raise PlogicEvaluationError(
                    f"Cannot evaluate {type(expr).__name__}; only pure formulas have truth tables"
                )
        self._memo[expr] = res
        return res

    def __getitem__(self, expr: Expr) -> Bits:
        if isinstance(expr, Group):
            raise KeyError(expr)
        return self._memo[expr]

    def __contains__(self, expr: object) -> bool:
        return expr in self._memo and not isinstance(expr, Group)

    def __iter__(self) -> Iterator[Expr]:
        return (e for e in self._memo if not isinstance(e, Group))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def column_map(self) -> dict[Expr, Bits]:
        """Displayed columns keyed by sub-expression; Group nodes are excluded."""
        return {e: bits for e, bits in self._memo.items() if not isinstance(e, Group)}

    def columns(self) -> list[tuple[Expr, Bits]]:
        """Displayed columns in descending expression order: atoms, then negations, then binary nodes."""
        return sorted(self.column_map().items(), key=lambda item: item[0], reverse=True)

    @property
    def result(self) -> Bits:
        return self._memo[self.expr]

    def __repr__(self):
        return f"TruthTable(atoms={len(self.atoms)}, rows={self.rows}, columns={len(self)})"


def generate_table(expr: Expr, symbols: SymbolTable | None = None) -> TruthTable:
    """Evaluate `expr` under every assignment of its atoms."""
    return TruthTable(expr, symbols if symbols is not None else SymbolTable())
