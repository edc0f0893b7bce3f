import pytest

from sagegit.git.service import GitError
from sagegit.git.validate import (
    SecureCommand,
    ValidationError,
    setup_secure_command,
    validate_command_arg,
    validate_git_args,
    validate_path,
    validate_ref,
)


@pytest.mark.parametrize("ref", ["main", "feature/new-thing", "release-1.2", "HEAD", "v1.0.0"])
def test_validate_ref_accepts_plain_names(ref):
    assert validate_ref(ref) == ref


def test_validate_ref_empty():
    with pytest.raises(ValidationError, match="empty reference name"):
        validate_ref("")


@pytest.mark.parametrize(
    "ref", ["a&&b", "a||b", "a;b", "a|b", "a>b", "a<b", "a`b", "a$b", "a(b", "a)b", "a'b", 'a"b', "a\x00b", "a\nb"]
)
def test_validate_ref_injection(ref):
    with pytest.raises(ValidationError, match="invalid characters in reference name"):
        validate_ref(ref)


@pytest.mark.parametrize("ref", ["a b", "a~1", "a^", "a:b", "a\\b", "a?", "a[0]", "a*", "a\tb", "a\x7fb"])
def test_validate_ref_bad_characters(ref):
    with pytest.raises(ValidationError, match="invalid character"):
        validate_ref(ref)


def test_validate_ref_double_dot():
    with pytest.raises(ValidationError, match=r"'\.\.' sequence"):
        validate_ref("main..dev")


def test_validate_ref_at_brace():
    with pytest.raises(ValidationError, match="'@\\{' sequence"):
        validate_ref("main@{1}")


def test_validate_ref_lock_suffix():
    with pytest.raises(ValidationError, match="cannot end with .lock"):
        validate_ref("branch.lock")


def test_validation_error_is_git_error_and_value_error():
    with pytest.raises(GitError):
        validate_ref("")
    with pytest.raises(ValueError):
        validate_ref("")


@pytest.mark.parametrize("path", ["src/main.go", "README.md", "dir/sub/file.txt"])
def test_validate_path_accepts_relative(path):
    assert validate_path(path) == path


@pytest.mark.parametrize(
    "path,message",
    [
        ("", "empty path"),
        ("a;rm", "invalid characters in path"),
        ("../etc/passwd", "path traversal detected"),
        ("/etc/hosts", "absolute paths are not allowed"),
        ("C:\\Windows", "absolute paths are not allowed"),
        ("C:/Windows", "absolute paths are not allowed"),
    ],
)
def test_validate_path_rejects(path, message):
    with pytest.raises(ValidationError, match=message):
        validate_path(path)


def test_validate_command_arg_allows_spaces_and_dots():
    assert validate_command_arg("fix: a thing..") == "fix: a thing.."


def test_validate_command_arg_rejects():
    with pytest.raises(ValidationError, match="empty argument"):
        validate_command_arg("")
    with pytest.raises(ValidationError, match="invalid characters in argument: x\\$y"):
        validate_command_arg("x$y")


def test_validate_git_args_commit_message():
    args = ["commit", "-m", "fix: a thing"]
    assert validate_git_args(args) == tuple(args)


def test_validate_git_args_message_injection():
    with pytest.raises(ValidationError, match="invalid commit message"):
        validate_git_args(["commit", "-m", "bad; rm"])


def test_validate_git_args_plain_argument_uses_ref_rules():
    with pytest.raises(ValidationError, match="invalid argument: invalid character"):
        validate_git_args(["checkout", "has space"])


def test_validate_git_args_revision_range():
    args = ["rev-list", "--count", "abc..def"]
    assert validate_git_args(args) == tuple(args)
    with pytest.raises(ValidationError, match="invalid argument"):
        validate_git_args(["checkout", "abc..def"])
    with pytest.raises(ValidationError, match="invalid revision range"):
        validate_git_args(["log", "a..b;c"])


def test_validate_git_args_format_value_skipped():
    args = ["log", "--format", "%H %s"]
    assert validate_git_args(args) == tuple(args)


def test_validate_git_args_temp_file():
    args = ["commit", "-F", "sage-commit-msg-123"]
    assert validate_git_args(args) == tuple(args)
    with pytest.raises(ValidationError, match="invalid file path"):
        validate_git_args(["commit", "-F", "/tmp/sage-commit-msg-1"])


def test_setup_secure_command_git_env(monkeypatch):
    monkeypatch.setenv("PATH", "/usr/bin")
    monkeypatch.setenv("GIT_DIR", "/repo/.git")
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    cmd = setup_secure_command("git", "status", "--porcelain")
    assert isinstance(cmd, SecureCommand)
    assert cmd.argv == ["git", "status", "--porcelain"]
    assert cmd.env["PATH"] == "/usr/bin"
    assert cmd.env["GIT_TERMINAL_PROMPT"] == "0"
    assert cmd.env["GIT_DIR"] == "/repo/.git"
    assert "GIT_WORK_TREE" not in cmd.env


def test_setup_secure_command_non_git_env(monkeypatch):
    monkeypatch.setenv("GIT_DIR", "/repo/.git")
    cmd = setup_secure_command("grep", "-P", "foo")
    assert "GIT_TERMINAL_PROMPT" not in cmd.env
    assert "GIT_DIR" not in cmd.env
    assert set(cmd.env) == {"PATH", "HOME", "USER", "LANG", "LC_ALL"}


def test_setup_secure_command_format_skipped():
    cmd = setup_secure_command("git", "branch", "--format=%(refname:short)")
    assert cmd.args == ("branch", "--format=%(refname:short)")
    cmd = setup_secure_command("git", "log", "--format", "%(x)")
    assert cmd.args[-1] == "%(x)"


def test_setup_secure_command_rejects():
    with pytest.raises(ValidationError):
        setup_secure_command("git;rm")
    with pytest.raises(ValidationError, match="invalid revision range"):
        setup_secure_command("git", "log", "a..b|c")
    with pytest.raises(ValidationError, match="invalid characters in argument"):
        setup_secure_command("git", "status", "a|b")