"""Terminal colours, status messages and simple prompts."""

from __future__ import annotations

import sys
from typing import Any

import click

RESET = "\x1b[0m"
BOLD = "\x1b[1m"

COMMIT_TYPES = ("feat", "fix", "docs", "style", "refactor", "test", "chore")

_HEADINGS = (
    "Usage:",
    "Examples:",
    "Available Commands:",
    "Flags:",
    "Aliases:",
    "Additional Commands:",
)
_TEMPLATE_PLACEHOLDERS = ("{{rpad .Name .NamePadding }}", "{{.CommandPath}}")


class UserError(Exception):
    """An error meant to be shown to the user as it is."""


def hex_to_ansi(hex_color: str) -> str:
    """Return the 24-bit foreground escape sequence for a ``#RGB`` or ``#RRGGBB`` colour."""
    digits = hex_color.removeprefix("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        raise ValueError(f"invalid hex colour: {hex_color!r}")
    try:
        red_, green_, blue_ = (int(digits[i : i + 2], 16) for i in range(0, 6, 2))
    except ValueError as exc:
        raise ValueError(f"invalid hex colour: {hex_color!r}") from exc
    return f"\x1b[38;2;{red_};{green_};{blue_}m"


_SAGE = hex_to_ansi("#8EA58C")
_BLUE = hex_to_ansi("#59B4FF")
_YELLOW = hex_to_ansi("#FFC402")
_RED = hex_to_ansi("#FF707E")
_WHITE = hex_to_ansi("#FFF")
_GRAY = hex_to_ansi("#6B737C")
_GREEN = hex_to_ansi("#98C379")


def green(s: str) -> str:
    return _GREEN + s + RESET


def red(s: str) -> str:
    return _RED + s + RESET


def blue(s: str) -> str:
    return _BLUE + s + RESET


def white(s: str) -> str:
    return _WHITE + s + RESET


def yellow(s: str) -> str:
    return _YELLOW + s + RESET


def gray(s: str) -> str:
    return _GRAY + s + RESET


def sage(s: str) -> str:
    return _SAGE + s + RESET


def bold(s: str) -> str:
    return BOLD + s + RESET


def warnf(message: str, *args: Any) -> None:
    """Print a red warning, formatting ``message`` with ``args`` in %-style."""
    text = message % args if args else message
    print(red(red("Warning: ") + text), end="", flush=True)


def info(msg: str) -> None:
    print(f"{blue('ℹ')} {msg}")


def success(msg: str) -> None:
    print(f"{green('✓')} {msg}")


def warning(msg: str) -> None:
    print(f"{yellow('⚠')} {msg}")


def error(msg: str) -> None:
    print(f"{red('✗')} {msg}")


def confirm(msg: str) -> bool:
    """Ask a yes/no question on standard input; anything but y/yes is no."""
    print(f"{yellow('?')} {msg} [y/N]: ", end="", flush=True)
    line = sys.stdin.readline()
    if not line.endswith("\n"):
        return False
    return line.strip().lower() in ("y", "yes")


def non_empty(val: Any) -> str:
    """Return ``val`` if it is a non-empty string, else raise :class:`UserError`."""
    if not isinstance(val, str) or val == "":
        raise UserError("cannot be empty")
    return val


def color_headings(text: str) -> str:
    """Colour the section headings and name placeholders of a help template."""
    for heading in _HEADINGS:
        text = text.replace(heading, f"{_SAGE}{BOLD}{heading}{RESET}")
    for placeholder in _TEMPLATE_PLACEHOLDERS:
        text = text.replace(placeholder, f"{_WHITE}{placeholder}{RESET}")
    return text


def ask_commit_message(use_conventional: bool) -> tuple[str, str, str]:
    """Prompt for a commit message; return ``(message, scope, type)``."""
    if not use_conventional:
        return click.prompt("Commit message", type=str), "", ""
    ctype = click.prompt("Type", type=click.Choice(COMMIT_TYPES))
    scope = click.prompt("Scope", default="", show_default=False, type=str)
    msg = click.prompt("Message", type=str)
    return msg, scope, ctype


def new_error(msg: str) -> UserError:
    """Return an error carrying ``msg``."""
    return UserError(msg)