import pytest

from plogic import config
from plogic.session import DisplayMode, Session


def test_defaults():
    assert config.get_strict_match() is False
    assert config.get_display_mode() == "bits"
    assert config.get_log_level() == "WARNING"


@pytest.mark.parametrize(
    "raw,expected",
    [("1", True), ("true", True), ("YES", True), (" on ", True),
     ("0", False), ("false", False), ("off", False), ("", False)],
)
def test_strict_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("PLOGIC_STRICT_MATCH", raw)
    assert config.get_strict_match() is expected


@pytest.mark.parametrize(
    "raw,expected",
    [("bool", "bool"), ("BITS", "bits"), ("colour", "bits")],
)
def test_display_mode(monkeypatch, raw, expected):
    monkeypatch.setenv("PLOGIC_DISPLAY", raw)
    assert config.get_display_mode() == expected


@pytest.mark.parametrize(
    "raw,expected",
    [("debug", "DEBUG"), ("Info", "INFO"), ("loud", "WARNING")],
)
def test_log_level(monkeypatch, raw, expected):
    monkeypatch.setenv("PLOGIC_LOG_LEVEL", raw)
    assert config.get_log_level() == expected


def test_session_from_env(monkeypatch):
    monkeypatch.setenv("PLOGIC_STRICT_MATCH", "yes")
    monkeypatch.setenv("PLOGIC_DISPLAY", "bool")
    session = Session.from_env()
    assert session.strict is True
    assert session.display is DisplayMode.BOOL
    assert session.previous == ""
    assert len(session.rules) == 0


def test_display_toggle():
    session = Session()
    assert session.toggle_display() is DisplayMode.BOOL
    assert session.toggle_display() is DisplayMode.BITS
