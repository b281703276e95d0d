"""Environment, Encoding and event tests."""

import pytest

from corlib.config import configure
from corlib.environment import (
    Encoding,
    Environment,
    EventArgs,
    NEvent,
    PropertyChangedEventArgs,
)
from corlib.errors import ArgumentException, ArgumentNullException


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


def test_new_line_follows_config():
    assert Environment.NewLine == "\n"
    configure(new_line="\r\n")
    assert Environment.NewLine == "\r\n"


def test_new_line_from_env(monkeypatch):
    monkeypatch.setenv("CORLIB_NEWLINE", "crlf")
    assert Environment.NewLine == "\r\n"


def test_tick_count_and_processors():
    first = Environment.TickCount
    assert first >= 0
    assert Environment.TickCount >= first
    assert Environment.ProcessorCount == 1


def test_get_environment_variable(monkeypatch):
    monkeypatch.setenv("CORLIB_TEST_VAR", "v")
    assert Environment.GetEnvironmentVariable("CORLIB_TEST_VAR") == "v"
    monkeypatch.delenv("CORLIB_TEST_VAR")
    assert Environment.GetEnvironmentVariable("CORLIB_TEST_VAR") is None
    with pytest.raises(ArgumentNullException):
        Environment.GetEnvironmentVariable(None)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def test_utf8_round_trip():
    data = Encoding.UTF8.GetBytes("hé")
    assert data == [ord("h"), 0xC3, 0xA9]
    assert Encoding.UTF8.GetString(data) == "hé"


def test_ascii_replaces_unencodable():
    assert Encoding.ASCII.GetBytes("é") == [ord("?")]
    assert Encoding.ASCII.GetString([0xFF]) == "�"


def test_unicode_is_utf16_le():
    assert Encoding.Unicode.GetBytes("A") == [0x41, 0x00]
    assert Encoding.Unicode.WebName == "utf-16"
    assert Encoding.UTF8.WebName == "utf-8"


def test_encoding_errors():
    with pytest.raises(ArgumentNullException):
        Encoding.UTF8.GetBytes(None)
    with pytest.raises(ArgumentNullException):
        Encoding.UTF8.GetString(None)
    with pytest.raises(ArgumentException):
        Encoding.UTF8.GetString([300])


def test_encoding_equality():
    assert Encoding("utf-8") == Encoding.UTF8
    assert Encoding("utf-8").GetHashCode() == Encoding.UTF8.GetHashCode()
    assert Encoding.UTF8 != Encoding.ASCII


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


def test_event_invokes_listeners_in_order():
    seen = []
    ev = NEvent()
    ev.Add(lambda s, e: seen.append(("a", s)))
    ev.Add(lambda s, e: seen.append(("b", s)))
    ev.ToMulticastFunction()("sender", EventArgs.Empty)
    assert seen == [("a", "sender"), ("b", "sender")]


def test_event_remove_first_equal():
    seen = []

    def handler(s, e):
        seen.append(s)

    ev = NEvent()
    ev.Add(handler)
    ev.Add(handler)
    ev.Remove(handler)
    assert len(ev) == 1
    ev.Remove(lambda s, e: None)
    assert len(ev) == 1
    ev.ToMulticastFunction()(1, EventArgs.Empty)
    assert seen == [1]


def test_empty_event_has_no_function():
    assert NEvent().ToMulticastFunction() is None


def test_listener_added_during_invoke_runs_next_time():
    ev = NEvent()
    seen = []

    def once(s, e):
        seen.append("once")
        ev.Add(lambda s, e: seen.append("late"))

    ev.Add(once)
    ev.ToMulticastFunction()(None, EventArgs.Empty)
    assert seen == ["once"]


def test_property_changed_args():
    assert PropertyChangedEventArgs("Name").PropertyName == "Name"
