"""
Interactive loop for plogic.

Reads one formula per line and prints its truth table, the rewritten formula,
a binding acknowledgement or a diagnostic. `help`, `toggle`, `quit` and empty
lines are handled here and never reach the core.

    plogic                       # interactive
    plogic "p & q" "ans => p & q = q & p"
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Sequence

from plogic import config
from plogic.interpreter import Interpreter
from plogic.printer import usage
from plogic.session import DisplayMode, Session

PROMPT = "> "
BANNER = "Welcome to the REPL of Plogic."


def handle_line(interp: Interpreter, line: str) -> str | None:
    """Output for one raw input line; None means quit."""
    line = line.strip()
    if line == "quit":
        return None
    if not line:
        return ""
    if line == "help":
        return usage()
    if line == "toggle":
        mode = interp.session.toggle_display()
        return f"display: {mode.value}"
    return interp.eval_text(line)


def run(interp: Interpreter, read: Callable[[str], str] = input) -> None:
    print(BANNER)
    print(usage())
    while True:
        try:
            line = read(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        out = handle_line(interp, line)
        if out is None:
            break
        if out:
            print(out)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plogic",
        description="Truth tables and rule-based rewriting for propositional formulas.",
    )
    parser.add_argument("formulas", nargs="*", help="evaluate these lines and exit")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="require repeated pattern atoms to match the same sub-expression")
    parser.add_argument("--display", choices=[m.value for m in DisplayMode], default=None,
                        help="show truth values as 0/1 (bits) or F/T (bool)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=config.get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    session = Session.from_env()
    if args.strict:
        session.strict = True
    if args.display:
        session.display = DisplayMode(args.display)
    interp = Interpreter(session)

    if args.formulas:
        for line in args.formulas:
            out = handle_line(interp, line)
            if out is None:
                break
            if out:
                print(out)
        return 0

    run(interp)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
