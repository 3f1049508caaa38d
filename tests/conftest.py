import pytest

from plogic.interpreter import Interpreter
from plogic.reader.lexer import lex
from plogic.reader.parser import parse
from plogic.session import Session
from plogic.types.symbol_table import SymbolTable

# Configuration is read from PLOGIC_* environment variables. Clear them for
# every test so a developer's shell settings never leak into expectations;
# tests that exercise the configuration set them through monkeypatch.
_ENV_VARS = ("PLOGIC_STRICT_MATCH", "PLOGIC_DISPLAY", "PLOGIC_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(params=["permissive", "strict"])
def match_policy(request):
    return request.param == "strict"


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def interp(session):
    return Interpreter(session)


def parse_line(source: str, previous: str = ""):
    """Parse `source` with a fresh symbol table; returns (expr, symbols)."""
    symbols = SymbolTable()
    expr = parse(lex(source, previous), symbols)
    return expr, symbols
