import io
import re

import pytest

from sagegit.ui import style
from sagegit.ui.style import (
    RESET,
    UserError,
    ask_commit_message,
    blue,
    bold,
    color_headings,
    confirm,
    error,
    gray,
    green,
    hex_to_ansi,
    info,
    new_error,
    non_empty,
    red,
    sage,
    success,
    warnf,
    warning,
    white,
    yellow,
)

_ANSI = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")


def strip_ansi(text):
    return _ANSI.sub("", text)


@pytest.mark.parametrize(
    "fn, text",
    [
        (green, "success"),
        (red, "error"),
        (blue, "info"),
        (white, "text"),
        (yellow, "warning"),
        (gray, "disabled"),
        (sage, "brand"),
        (bold, "important"),
    ],
)
def test_color_functions(fn, text):
    result = fn(text)
    assert text in strip_ansi(result)
    assert result.endswith(RESET)


def test_hex_to_ansi_short_and_long_forms_agree():
    assert hex_to_ansi("#FFF") == "\x1b[38;2;255;255;255m"
    assert hex_to_ansi("#FFF") == hex_to_ansi("#FFFFFF")


@pytest.mark.parametrize("bad", ["#12", "#GGGGGG", "", "#1234567"])
def test_hex_to_ansi_rejects_invalid(bad):
    with pytest.raises(ValueError):
        hex_to_ansi(bad)


def test_warnf(capsys):
    warnf("test warning %d", 42)
    out = capsys.readouterr().out
    assert "Warning: test warning 42" in strip_ansi(out)


@pytest.mark.parametrize(
    "fn, text, expected",
    [
        (info, "test info", "ℹ test info"),
        (success, "test success", "✓ test success"),
        (warning, "test warning", "⚠ test warning"),
        (error, "test error", "✗ test error"),
    ],
)
def test_info_functions(capsys, fn, text, expected):
    fn(text)
    out = strip_ansi(capsys.readouterr().out).strip()
    assert expected in out


def test_non_empty_rejects_empty_string():
    with pytest.raises(UserError):
        non_empty("")


def test_non_empty_accepts_text():
    assert non_empty("test") == "test"


def test_non_empty_rejects_non_string():
    with pytest.raises(UserError):
        non_empty(42)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Usage: command", ["Usage:", "command"]),
        ("Examples:\n  example1\n  example2", ["Examples:", "example1", "example2"]),
        ("Available Commands:\n  cmd1\n  cmd2", ["Available Commands:", "cmd1", "cmd2"]),
        ("Flags:\n  --flag1\n  --flag2", ["Flags:", "--flag1", "--flag2"]),
    ],
)
def test_color_headings(text, expected):
    clean = strip_ansi(color_headings(text))
    for part in expected:
        assert part in clean


def test_color_headings_wraps_heading_in_escapes():
    result = color_headings("Flags:")
    assert result != "Flags:"
    assert result.endswith("Flags:" + RESET)
    assert strip_ansi(result) == "Flags:"


def test_new_error_carries_message():
    err = new_error("boom")
    assert isinstance(err, UserError)
    assert str(err) == "boom"


@pytest.mark.parametrize(
    "answer, expected",
    [("y\n", True), ("YES\n", True), ("n\n", False), ("\n", False), ("y", False)],
)
def test_confirm(monkeypatch, capsys, answer, expected):
    monkeypatch.setattr("sys.stdin", io.StringIO(answer))
    assert confirm("Proceed?") is expected
    assert "Proceed? [y/N]:" in strip_ansi(capsys.readouterr().out)


def test_ask_commit_message_plain(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("fix the bug\n"))
    assert ask_commit_message(False) == ("fix the bug", "", "")


def test_ask_commit_message_conventional(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("feat\nui\nadd button\n"))
    assert ask_commit_message(True) == ("add button", "ui", "feat")


def test_commit_types_match_prompt_choices(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("nope\nchore\n\ntidy\n"))
    msg, scope, ctype = ask_commit_message(True)
    assert ctype in style.COMMIT_TYPES
    assert (msg, scope, ctype) == ("tidy", "", "chore")