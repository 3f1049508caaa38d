from __future__ import annotations
import os
from typing import Iterable


_TRUTHY = ('1', 'true', 'yes', 'on')
_DISPLAY_MODES = ('bits', 'bool')
_LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')

# Defaults
_DEFAULT_STRICT_MATCH = False
_DEFAULT_DISPLAY = 'bits'
_DEFAULT_LOG_LEVEL = 'WARNING'


def flag_from_env(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def choice_from_env(var: str, choices: Iterable[str], default: str) -> str:
    raw = os.environ.get(var)
    if not raw:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


def get_strict_match() -> bool:
    return flag_from_env('PLOGIC_STRICT_MATCH', _DEFAULT_STRICT_MATCH)


def get_display_mode() -> str:
    return choice_from_env('PLOGIC_DISPLAY', _DISPLAY_MODES, _DEFAULT_DISPLAY)


def get_log_level() -> str:
    level = choice_from_env('PLOGIC_LOG_LEVEL', _LOG_LEVELS, _DEFAULT_LOG_LEVEL.lower())
    return level.upper()
