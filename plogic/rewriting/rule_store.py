"""Session store of named equivalence rules."""

from __future__ import annotations

import logging
from typing import Iterator

from plogic.errors import PlogicUndefinedRuleError
from plogic.types.expr import Equivalence

logger = logging.getLogger(__name__)


class RuleStore:
    """Mapping from rule name to the Equivalence bound under it.

    A stored rule keeps the atom indices of the line that bound it; its atoms
    are only ever compared with each other during matching.
    """

    __slots__ = ("rules",)

    def __init__(self):
        self.rules: dict[str, Equivalence] = {}

    def bind(self, name: str, rule: Equivalence) -> None:
        """Bind `name` to `rule`, replacing any earlier binding."""
        if not isinstance(rule, Equivalence):
            raise TypeError(f"Only equivalences can be bound, got {rule!r}")
        logger.debug("binding rule %s", name)
        self.rules[name] = rule

    def lookup(self, name: str) -> Equivalence:
        try:
            return self.rules[name]
        except KeyError:
            raise PlogicUndefinedRuleError(f"Undefined rule used: {name}") from None

    def get(self, name: str) -> Equivalence | None:
        return self.rules.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.rules

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[str]:
        return iter(self.rules)
