"""Checks on references, paths and command arguments before they reach a subprocess."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from sagegit.git.service import GitError

_INJECTION_TOKENS = ("&&", "||", ";", "|", ">", "<", "`", "$", "(", ")", "'", '"', "\x00", "\n")
_BAD_REF_CHARS = frozenset("~^:\\?[*")
_RANGE_COMMANDS = frozenset({"rev-list", "log", "diff", "show", "blame"})
_BASE_ENV_VARS = ("PATH", "HOME", "USER", "LANG", "LC_ALL")
_GIT_ENV_VARS = ("GIT_DIR", "GIT_WORK_TREE", "GIT_CONFIG")


class ValidationError(GitError, ValueError):
    """A value was rejected before any command was run."""


def _has_injection(value: str) -> bool:
    return any(token in value for token in _INJECTION_TOKENS)


def validate_ref(ref: str) -> str:
    """Check that ``ref`` is a safe git reference name and return it."""
    if not ref:
        raise ValidationError("empty reference name")
    if _has_injection(ref):
        raise ValidationError("invalid characters in reference name")
    for char in ref:
        if ord(char) <= 32 or ord(char) == 127 or char in _BAD_REF_CHARS:
            raise ValidationError(f"invalid character '{char}' in reference name")
    if ".." in ref:
        raise ValidationError("invalid '..' sequence in reference name")
    if "@{" in ref:
        raise ValidationError("invalid '@{' sequence in reference name")
    if ref.endswith(".lock"):
        raise ValidationError("reference name cannot end with .lock")
    return ref


def validate_path(path: str) -> str:
    """Check that ``path`` is a safe relative file path and return it."""
    if not path:
        raise ValidationError("empty path")
    if _has_injection(path):
        raise ValidationError("invalid characters in path")
    if ".." in path:
        raise ValidationError("path traversal detected")
    if path.startswith("/") or (len(path) >= 3 and path[1] == ":" and path[2] in "/\\"):
        raise ValidationError("absolute paths are not allowed")
    return path


def validate_command_arg(arg: str) -> str:
    """Check that ``arg`` carries no shell injection pattern and return it."""
    if not arg:
        raise ValidationError("empty argument")
    if _has_injection(arg):
        raise ValidationError(f"invalid characters in argument: {arg}")
    return arg


def _wrap(prefix: str, check, value: str) -> None:
    try:
        check(value)
    except ValidationError as exc:
        raise ValidationError(f"{prefix}: {exc}") from exc


def validate_git_args(args: Sequence[str]) -> tuple[str, ...]:
    """Check the arguments of a git invocation, each by the rule its position calls for."""
    args = tuple(args)
    for i, arg in enumerate(args):
        previous = args[i - 1] if i > 0 else None
        if arg.startswith("-"):
            continue
        if previous is not None and (previous.startswith("--format=") or previous == "--format"):
            continue
        if previous in ("-F", "--file") and (
            "/tmp/" in arg or "\\Temp\\" in arg or arg.startswith("sage-commit-msg-")
        ):
            _wrap("invalid file path", validate_path, arg)
            continue
        if i > 0 and ".." in arg and args[0] in _RANGE_COMMANDS:
            _wrap("invalid revision range", validate_command_arg, arg)
            continue
        if previous in ("-m", "--message"):
            _wrap("invalid commit message", validate_command_arg, arg)
            continue
        _wrap("invalid argument", validate_ref, arg)
    return args


@dataclass(frozen=True)
class SecureCommand:
    """A validated program invocation with a restricted environment."""

    prog: str
    args: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> list[str]:
        return [self.prog, *self.args]

    def run(
        self,
        *,
        input: str | None = None,
        capture_output: bool = True,
    ) -> subprocess.CompletedProcess:
        """Run the command and return the completed process without checking its status."""
        return subprocess.run(
            self.argv,
            env=self.env,
            input=input,
            capture_output=capture_output,
            text=True,
            check=False,
        )


def _restricted_env(prog: str, environ: Iterable[tuple[str, str]] | None = None) -> dict[str, str]:
    source = dict(environ) if environ is not None else dict(os.environ)
    env = {name: source.get(name, "") for name in _BASE_ENV_VARS}
    if prog == "git":
        env["GIT_TERMINAL_PROMPT"] = "0"
        for name in _GIT_ENV_VARS:
            value = source.get(name, "")
            if value:
                env[name] = value
    return env


def setup_secure_command(prog: str, *args: str) -> SecureCommand:
    """Validate a program and its arguments and build a command with a limited environment."""
    validate_command_arg(prog)
    for i, arg in enumerate(args):
        previous = args[i - 1] if i > 0 else ""
        if arg.startswith("--format=") or previous.startswith("--format") or arg.startswith("--pretty="):
            continue
        if i > 0 and ".." in arg and prog == "git" and args[0] in _RANGE_COMMANDS:
            _wrap("invalid revision range", validate_command_arg, arg)
            continue
        validate_command_arg(arg)
    return SecureCommand(prog=prog, args=tuple(args), env=_restricted_env(prog, os.environ.items()))