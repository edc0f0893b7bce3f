"""The interface every git backend implements, and the error it raises."""

from __future__ import annotations

import abc
from collections.abc import Sequence
from datetime import datetime


class GitError(Exception):
    """A git operation failed."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class GitService(abc.ABC):
    """Operations on a git repository.

    Every method raises :class:`GitError` when the underlying operation fails.
    """

    @abc.abstractmethod
    def is_repo(self) -> bool:
        """Return whether the working directory is inside a repository."""

    @abc.abstractmethod
    def is_clean(self) -> bool:
        """Return whether the working tree has no uncommitted changes."""

    @abc.abstractmethod
    def stage_all(self) -> None:
        """Stage every change in the working tree."""

    @abc.abstractmethod
    def stage_all_except(self, exclude_paths: Sequence[str]) -> None:
        """Stage every change whose path does not start with one of ``exclude_paths``."""

    @abc.abstractmethod
    def is_path_staged(self, path: str) -> bool:
        """Return whether ``path`` has staged changes."""

    @abc.abstractmethod
    def commit(self, msg: str, allow_empty: bool, stage_all: bool) -> None:
        """Create a commit with ``msg``."""

    @abc.abstractmethod
    def current_branch(self) -> str:
        """Return the name of the checked-out branch."""

    @abc.abstractmethod
    def push(self, branch: str, force: bool) -> None:
        """Push ``branch`` to origin, forcing if asked."""

    @abc.abstractmethod
    def push_with_lease(self, branch: str) -> None:
        """Push ``branch`` to origin with ``--force-with-lease``."""

    @abc.abstractmethod
    def get_diff(self) -> str:
        """Return the staged diff, or the unstaged one when nothing is staged."""

    @abc.abstractmethod
    def default_branch(self) -> str:
        """Return the name of the remote's default branch."""

    @abc.abstractmethod
    def merged_branches(self, base: str) -> list[str]:
        """Return the branches already merged into ``base``."""

    @abc.abstractmethod
    def delete_branch(self, name: str) -> None:
        """Delete the local branch ``name``."""

    @abc.abstractmethod
    def delete_remote_branch(self, name: str) -> None:
        """Delete ``name`` from origin."""

    @abc.abstractmethod
    def fetch_all(self) -> None:
        """Fetch all remotes and prune deleted branches."""

    @abc.abstractmethod
    def checkout(self, name: str) -> None:
        """Switch to the branch or commit ``name``."""

    @abc.abstractmethod
    def pull(self) -> None:
        """Pull with the repository's default strategy."""

    @abc.abstractmethod
    def pull_ff(self) -> None:
        """Pull, fast-forward only."""

    @abc.abstractmethod
    def pull_rebase(self) -> None:
        """Pull with rebase."""

    @abc.abstractmethod
    def pull_merge(self) -> None:
        """Pull with merge."""

    @abc.abstractmethod
    def create_branch(self, name: str) -> None:
        """Create the branch ``name``."""

    @abc.abstractmethod
    def merge(self, base: str) -> None:
        """Merge ``base`` into the current branch."""

    @abc.abstractmethod
    def merge_abort(self) -> None:
        """Abort a merge in progress."""

    @abc.abstractmethod
    def is_merging(self) -> bool:
        """Return whether a merge is in progress."""

    @abc.abstractmethod
    def rebase_abort(self) -> None:
        """Abort a rebase in progress."""

    @abc.abstractmethod
    def is_rebasing(self) -> bool:
        """Return whether a rebase is in progress."""

    @abc.abstractmethod
    def status_porcelain(self) -> str:
        """Return the porcelain v1 status including all untracked files."""

    @abc.abstractmethod
    def reset_soft(self, ref: str) -> None:
        """Soft-reset to ``ref``."""

    @abc.abstractmethod
    def list_branches(self) -> list[str]:
        """Return the local branches, most recently committed first."""

    @abc.abstractmethod
    def log(self, branch: str, limit: int, stats: bool, include_all: bool) -> str:
        """Return the raw log output for ``branch``."""

    @abc.abstractmethod
    def squash_commits(self, start_commit: str) -> None:
        """Start an interactive rebase from ``start_commit``."""

    @abc.abstractmethod
    def is_head_branch(self, branch: str) -> bool:
        """Return whether ``branch`` is the default branch."""

    @abc.abstractmethod
    def get_first_commit(self) -> str:
        """Return the hash of the repository's root commit."""

    @abc.abstractmethod
    def run_interactive(self, cmd: str, *args: str) -> None:
        """Run a git subcommand attached to the terminal."""

    @abc.abstractmethod
    def get_branch_last_commit(self, branch: str) -> datetime:
        """Return the time of the last commit on ``branch``."""

    @abc.abstractmethod
    def get_branch_commit_count(self, branch: str) -> int:
        """Return the number of commits reachable from ``branch``."""

    @abc.abstractmethod
    def get_branch_merge_conflicts(self, branch: str) -> int:
        """Return the number of conflicts merging ``branch`` into the default branch would raise."""

    @abc.abstractmethod
    def stash(self, message: str) -> None:
        """Stash the current changes under ``message``."""

    @abc.abstractmethod
    def stash_pop(self) -> None:
        """Apply and drop the most recent stash."""

    @abc.abstractmethod
    def stash_list(self) -> list[str]:
        """Return the stash entries."""

    @abc.abstractmethod
    def get_merge_base(self, branch1: str, branch2: str) -> str:
        """Return the best common ancestor of two branches."""

    @abc.abstractmethod
    def get_commit_count(self, revision_range: str) -> int:
        """Return the number of commits in ``revision_range``."""

    @abc.abstractmethod
    def get_branch_divergence(self, branch1: str, branch2: str) -> int:
        """Return how many commits the two branches have apart from their merge base."""

    @abc.abstractmethod
    def get_commit_hash(self, ref: str) -> str:
        """Return the commit hash ``ref`` points at."""

    @abc.abstractmethod
    def is_ancestor(self, commit1: str, commit2: str) -> bool:
        """Return whether ``commit1`` is an ancestor of ``commit2``."""

    def set_config(self, key: str, value: str, use_global: bool) -> None:
        """Set a git configuration value, globally if asked."""
        args = ["config"]
        if use_global:
            args.append("--global")
        args.extend([key, value])
        self.run(*args)

    def get_repo_path(self) -> str:
        """Return the top-level directory of the repository."""
        return self.run("rev-parse", "--show-toplevel").strip()

    @abc.abstractmethod
    def run(self, *args: str) -> str:
        """Run a git subcommand and return its standard output."""

    @abc.abstractmethod
    def staged_diff(self) -> str:
        """Return the diff of staged changes."""

    @abc.abstractmethod
    def grep_diff(self, diff: str, pattern: str) -> list[str]:
        """Return the lines of ``diff`` matching ``pattern``."""

    @abc.abstractmethod
    def list_conflicted_files(self) -> str:
        """Return the paths with unresolved conflicts, one per line."""

    @abc.abstractmethod
    def get_config_value(self, key: str) -> str:
        """Return a git configuration value."""

    @abc.abstractmethod
    def merge_continue(self) -> None:
        """Conclude a merge once conflicts are resolved."""

    @abc.abstractmethod
    def rebase_continue(self) -> None:
        """Continue a rebase once conflicts are resolved."""