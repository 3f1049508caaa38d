"""Per-session state threaded through every call to the core."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from plogic import config
from plogic.rewriting.rule_store import RuleStore


class DisplayMode(Enum):
    BITS = "bits"   # 0 / 1
    BOOL = "bool"   # F / T

    def toggled(self) -> DisplayMode:
        return DisplayMode.BOOL if self is DisplayMode.BITS else DisplayMode.BITS


@dataclass
class Session:
    """
    State kept between input lines: the text `ans` expands to, the bound
    rules, the display mode and the matching policy. Created at session
    start and mutated only by plogic.interpreter.process.
    """
    previous: str = ""
    rules: RuleStore = field(default_factory=RuleStore)
    display: DisplayMode = DisplayMode.BITS
    strict: bool = False

    @classmethod
    def from_env(cls) -> Session:
        return cls(
            display=DisplayMode(config.get_display_mode()),
            strict=config.get_strict_match(),
        )

    def toggle_display(self) -> DisplayMode:
        self.display = self.display.toggled()
        return self.display
