"""Values returned by plogic.interpreter.process, one per input line."""

from __future__ import annotations

from dataclasses import dataclass, field

from plogic.evaluation.truth_table import TruthTable


@dataclass
class CoreResult:
    # Lexical diagnostics and structural mismatch notices, in the order they occurred
    notes: list[str] = field(default_factory=list, kw_only=True)


@dataclass
class TableResult(CoreResult):
    table: TruthTable
    text: str           # the formula as rendered back to text


@dataclass
class RewriteResult(CoreResult):
    text: str


@dataclass
class BindingAck(CoreResult):
    name: str
    text: str           # the bound rule, rendered


@dataclass
class Diagnostic(CoreResult):
    kind: str           # "syntax" or "rewrite"
    message: str

    def __str__(self):
        return self.message
