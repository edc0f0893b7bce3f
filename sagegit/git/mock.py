"""An in-memory git backend for tests."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import datetime

from sagegit.git.service import GitError, GitService
from sagegit.git.validate import validate_ref


class MockGit(GitService):
    """Keeps a little repository state in memory and counts the calls made to it."""

    def __init__(self) -> None:
        self._current_branch = "main"
        self._is_clean = True
        self._is_repo = True
        self._branches: dict[str, bool] = {}
        self._commits: dict[str, str] = {}
        self._staged: dict[str, bool] = {}
        self._stashed: list[str] = []
        self._calls: Counter[str] = Counter()

    def _track(self, method: str) -> None:
        self._calls[method] += 1

    def _require_branch(self, name: str) -> None:
        if name not in self._branches:
            raise GitError(f"branch {name} does not exist")

    def call_count(self, method: str) -> int:
        """Return how many times ``method`` was called."""
        return self._calls[method]

    def set_clean(self, clean: bool) -> None:
        self._is_clean = clean

    def set_current_branch(self, branch: str) -> None:
        self._current_branch = branch
        self._branches[branch] = True

    def add_branch(self, name: str) -> None:
        self._branches[name] = True

    def is_repo(self) -> bool:
        self._track("is_repo")
        return self._is_repo

    def is_clean(self) -> bool:
        self._track("is_clean")
        return self._is_clean

    def stage_all(self) -> None:
        self._track("stage_all")

    def stage_all_except(self, exclude_paths: Sequence[str]) -> None:
        self._track("stage_all_except")

    def is_path_staged(self, path: str) -> bool:
        self._track("is_path_staged")
        return self._staged.get(path, False)

    def commit(self, msg: str, allow_empty: bool, stage_all: bool) -> None:
        self._track("commit")
        if not allow_empty and not self._staged:
            raise GitError("no changes to commit")
        self._commits["mock-hash"] = msg
        self._staged = {}
        self._is_clean = True

    def current_branch(self) -> str:
        self._track("current_branch")
        return self._current_branch

    def push(self, branch: str, force: bool) -> None:
        self._track("push")
        self._require_branch(branch)

    def push_with_lease(self, branch: str) -> None:
        self._track("push_with_lease")
        self._require_branch(branch)

    def get_diff(self) -> str:
        self._track("get_diff")
        return ""

    def default_branch(self) -> str:
        self._track("default_branch")
        return "main"

    def merged_branches(self, base: str) -> list[str]:
        self._track("merged_branches")
        return []

    def delete_branch(self, name: str) -> None:
        self._track("delete_branch")
        self._branches.pop(name, None)

    def delete_remote_branch(self, name: str) -> None:
        self._track("delete_remote_branch")
        validate_ref(name)
        self._branches.pop("origin/" + name, None)

    def fetch_all(self) -> None:
        self._track("fetch_all")

    def checkout(self, name: str) -> None:
        self._track("checkout")
        validate_ref(name)
        self._require_branch(name)
        self._current_branch = name

    def pull(self) -> None:
        self._track("pull")

    def pull_ff(self) -> None:
        self._track("pull_ff")

    def pull_rebase(self) -> None:
        self._track("pull_rebase")

    def pull_merge(self) -> None:
        self._track("pull_merge")

    def create_branch(self, name: str) -> None:
        self._track("create_branch")
        validate_ref(name)
        self._branches[name] = True

    def merge(self, base: str) -> None:
        self._track("merge")

    def merge_abort(self) -> None:
        self._track("merge_abort")

    def is_merging(self) -> bool:
        self._track("is_merging")
        return False

    def rebase_abort(self) -> None:
        self._track("rebase_abort")

    def is_rebasing(self) -> bool:
        self._track("is_rebasing")
        return False

    def status_porcelain(self) -> str:
        self._track("status_porcelain")
        return ""

    def reset_soft(self, ref: str) -> None:
        self._track("reset_soft")

    def list_branches(self) -> list[str]:
        self._track("list_branches")
        return list(self._branches)

    def log(self, branch: str, limit: int, stats: bool, include_all: bool) -> str:
        self._track("log")
        return ""

    def squash_commits(self, start_commit: str) -> None:
        self._track("squash_commits")

    def is_head_branch(self, branch: str) -> bool:
        self._track("is_head_branch")
        return self._current_branch == branch

    def get_first_commit(self) -> str:
        self._track("get_first_commit")
        return "mock-first-commit"

    def run_interactive(self, cmd: str, *args: str) -> None:
        self._track("run_interactive")

    def get_branch_last_commit(self, branch: str) -> datetime:
        self._track("get_branch_last_commit")
        return datetime.now().astimezone()

    def get_branch_commit_count(self, branch: str) -> int:
        self._track("get_branch_commit_count")
        return 1

    def get_branch_merge_conflicts(self, branch: str) -> int:
        self._track("get_branch_merge_conflicts")
        return 0

    def stash(self, message: str) -> None:
        self._track("stash")
        self._stashed.append(message)

    def stash_pop(self) -> None:
        self._track("stash_pop")
        if not self._stashed:
            raise GitError("no stash entries")
        self._stashed.pop()

    def stash_list(self) -> list[str]:
        self._track("stash_list")
        return list(self._stashed)

    def get_merge_base(self, branch1: str, branch2: str) -> str:
        self._track("get_merge_base")
        return "mock-merge-base"

    def get_commit_count(self, revision_range: str) -> int:
        self._track("get_commit_count")
        return 1

    def get_branch_divergence(self, branch1: str, branch2: str) -> int:
        self._track("get_branch_divergence")
        return 0

    def get_commit_hash(self, ref: str) -> str:
        self._track("get_commit_hash")
        return "mock-commit-hash"

    def is_ancestor(self, commit1: str, commit2: str) -> bool:
        self._track("is_ancestor")
        return True

    def set_config(self, key: str, value: str, use_global: bool) -> None:
        self._track("set_config")

    def get_repo_path(self) -> str:
        self._track("get_repo_path")
        return ""

    def run(self, *args: str) -> str:
        self._track("run")
        return ""

    def staged_diff(self) -> str:
        self._track("staged_diff")
        return ""

    def grep_diff(self, diff: str, pattern: str) -> list[str]:
        self._track("grep_diff")
        return []

    def list_conflicted_files(self) -> str:
        self._track("list_conflicted_files")
        return ""

    def get_config_value(self, key: str) -> str:
        self._track("get_config_value")
        return ""

    def merge_continue(self) -> None:
        self._track("merge_continue")

    def rebase_continue(self) -> None:
        self._track("rebase_continue")