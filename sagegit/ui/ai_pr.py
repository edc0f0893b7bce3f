"""Writing pull request titles, bodies and labels from branch, commit and diff information."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from sagegit.git.service import GitError
from sagegit.ui.pr_form import PRForm, truncate_body
from sagegit.ui.pr_template import (
    TESTING_CHECKLIST,
    GenerateInput,
    fill_template,
    generate_breaking_changes,
    generate_changes,
    generate_summary,
    has_breaking_changes,
)
from sagegit.ui.style import green

_BRANCH_PREFIXES = (
    (("feature/", "feat/"), "feature"),
    (("fix/", "bugfix/"), "bug"),
    (("docs/",), "documentation"),
    (("chore/",), "maintenance"),
)

_COMMIT_TYPE_LABELS = {
    "feat": "feature",
    "fix": "bug",
    "docs": "documentation",
    "chore": "maintenance",
    "refactor": "refactor",
    "test": "testing",
}

_CONVENTIONAL_TYPES = {
    "feature": "feat",
    "bug": "fix",
    "documentation": "docs",
    "maintenance": "chore",
    "enhancement": "feat",
}

_TYPE_TITLES = {
    "feat": "Features",
    "fix": "Bug Fixes",
    "docs": "Documentation Changes",
    "chore": "Maintenance",
    "refactor": "Code Refactoring",
    "test": "Tests",
}

_TYPE_ORDER = ("feat", "fix", "refactor", "docs", "test", "chore", "Other")

_CODE_MARKERS = (".go", ".js", ".ts", ".py", ".java")
_UI_MARKERS = (".css", ".scss", ".html", ".jsx", ".tsx")
_API_MARKERS = ("/api/", "openapi.yaml", "swagger.yaml", "proto")
_DOC_MARKERS = (".md", "docs/", "README", "CHANGELOG")
_DEPENDENCY_MARKERS = ("go.mod", "go.sum", "package.json", "requirements.txt", "Gemfile")

_DEFAULT_BRANCH_FALLBACK = "main"
_DEFAULT_TYPE = "enhancement"


@dataclass
class GenerateOutput:
    """A generated pull request title, body and labels."""

    title: str = ""
    body: str = ""
    labels: list[str] = field(default_factory=list)


def _commit_type(commit: str) -> str | None:
    """Return the conventional type of a commit line, without its scope, if it has one."""
    idx = commit.find(":")
    if idx <= 0:
        return None
    ctype = commit[:idx].strip()
    scope_start = ctype.find("(")
    if scope_start > 0:
        ctype = ctype[:scope_start]
    return ctype


def extract_branch_type(branch: str) -> str:
    """Return the kind of change a branch name announces by its prefix."""
    lowered = branch.lower()
    for prefixes, kind in _BRANCH_PREFIXES:
        if lowered.startswith(prefixes):
            return kind
    return _DEFAULT_TYPE


def extract_commit_types(commits: str) -> list[str]:
    """Return the conventional types of the commit lines that have one."""
    types = (_commit_type(line) for line in commits.split("\n") if line)
    return [ctype for ctype in types if ctype is not None]


def convert_commit_type_to_label(commit_type: str) -> str:
    """Return the label matching a conventional commit type."""
    return _COMMIT_TYPE_LABELS.get(commit_type, _DEFAULT_TYPE)


def determine_pr_type(branch_type: str, commit_types: list[str]) -> str:
    """Prefer an explicit branch type, else the most common commit type as a label."""
    if branch_type != _DEFAULT_TYPE:
        return branch_type
    counts = Counter(commit_types)
    most_common = counts.most_common(1)[0][0] if counts else _DEFAULT_TYPE
    return convert_commit_type_to_label(most_common)


def convert_to_conventional_type(branch_type: str) -> str:
    """Return the conventional commit type for a branch type."""
    return _CONVENTIONAL_TYPES.get(branch_type, "chore")


def extract_scope(branch: str) -> str:
    """Return the scope of a branch such as ``feat/ui/...``, or an empty string."""
    parts = branch.split("/")
    return parts[1] if len(parts) >= 3 else ""


def extract_description(branch: str, commits: str) -> str:
    """Describe the change from the branch name, or the first commit if the name is short."""
    name = branch.rsplit("/", 1)[-1]
    name = name.replace("-", " ").replace("_", " ").lower()
    if len(name) < 10:
        first = commits.split("\n")[0]
        if first:
            idx = first.find(": ")
            if idx != -1:
                return first[idx + 2 :].strip()
            return first.strip()
    return name


def generate_title(branch: str, commits: str) -> str:
    """Return a conventional-commit style title for the branch."""
    ctype = convert_to_conventional_type(extract_branch_type(branch))
    scope = extract_scope(branch)
    description = extract_description(branch, commits)
    if scope:
        return f"{ctype}({scope}): {description}"
    return f"{ctype}: {description}"


def generate_body(data: GenerateInput) -> str:
    """Return a plain body with description, changes and testing sections."""
    return (
        "## Description\n\n"
        + generate_summary(data)
        + "\n## Changes\n\n"
        + generate_changes(data)
        + "\n## Testing\n\n"
        + TESTING_CHECKLIST
    )


def suggest_labels(branch_type: str, diff: str, commits: str) -> list[str]:
    """Return labels for the change: its type, plus tests and documentation when touched."""
    labels = [branch_type]
    if "test" in diff:
        labels.append("tests")
    if "doc" in diff:
        labels.append("documentation")
    return labels


def convert_type_to_title(t: str) -> str:
    """Return the section heading for a conventional commit type."""
    return _TYPE_TITLES.get(t, "Other Changes")


def generate_detailed_changes(data: GenerateInput) -> str:
    """Return the commits grouped under headings by conventional type."""
    groups: dict[str, list[str]] = {}
    for commit in data.commits.split("\n"):
        if not commit:
            continue
        ctype = _commit_type(commit) or "Other"
        groups.setdefault(ctype, []).append(commit)

    parts: list[str] = []
    for ctype in _TYPE_ORDER:
        commits = groups.get(ctype)
        if not commits:
            continue
        parts.append(f"### {convert_type_to_title(ctype)}\n\n")
        for commit in commits:
            idx = commit.find(":")
            msg = commit[idx + 1 :].strip() if idx > 0 else commit
            parts.append(f"- {msg}\n")
        parts.append("\n")
    return "".join(parts)


def _mentions(diff: str, markers: tuple[str, ...]) -> bool:
    return any(marker in diff for marker in markers)


def has_code_changes(diff: str) -> bool:
    return _mentions(diff, _CODE_MARKERS)


def has_ui_changes(diff: str) -> bool:
    return _mentions(diff, _UI_MARKERS)


def has_api_changes(diff: str) -> bool:
    return _mentions(diff, _API_MARKERS)


def has_doc_changes(diff: str) -> bool:
    return _mentions(diff, _DOC_MARKERS)


def has_dependency_changes(diff: str) -> bool:
    return _mentions(diff, _DEPENDENCY_MARKERS)


def generate_testing_section(data: GenerateInput) -> str:
    """Return a testing checklist fitted to the kinds of files the diff touches."""
    parts = ["This PR has been tested with the following checks:\n\n"]
    if has_code_changes(data.diff):
        parts.append(
            "### Code Changes\n"
            "- [ ] Unit tests have been added/updated\n"
            "- [ ] Integration tests have been added/updated\n"
            "- [ ] Manual testing has been performed\n\n"
        )
    if has_ui_changes(data.diff):
        parts.append(
            "### UI Changes\n"
            "- [ ] Visual changes have been reviewed\n"
            "- [ ] Cross-browser testing performed\n"
            "- [ ] Responsive design verified\n\n"
        )
    if has_api_changes(data.diff):
        parts.append(
            "### API Changes\n"
            "- [ ] API documentation updated\n"
            "- [ ] API tests added/updated\n"
            "- [ ] Backward compatibility verified\n\n"
        )
    return "".join(parts)


def generate_comprehensive_body(data: GenerateInput) -> str:
    """Return a full body: description, grouped changes, testing and any extra sections."""
    parts = ["## Description\n\n"]
    summary = generate_summary(data)
    if summary:
        parts.append(summary + "\n\n")

    parts.append("## Changes\n\n")
    changes = generate_detailed_changes(data)
    if changes:
        parts.append(changes + "\n")

    parts.append("## Testing\n\n")
    parts.append(generate_testing_section(data))

    if has_breaking_changes(data):
        parts.append("\n## Breaking Changes\n\n")
        parts.append(generate_breaking_changes(data))

    if has_doc_changes(data.diff):
        parts.append("\n## Documentation\n\n")
        parts.append("- Documentation has been updated to reflect the changes\n")

    if has_dependency_changes(data.diff):
        parts.append("\n## Dependencies\n\n")
        parts.append("- Dependencies have been updated. Please review the changes carefully.\n")

    return "".join(parts)


def generate_pr_content(data: GenerateInput) -> GenerateOutput:
    """Write a title, body and labels from what is known about the branch."""
    pr_type = determine_pr_type(
        extract_branch_type(data.branch), extract_commit_types(data.commits)
    )
    title = generate_title(data.branch, data.commits)
    body = fill_template(data.template, data) if data.template else generate_comprehensive_body(data)
    labels = suggest_labels(pr_type, data.diff, data.commits)
    return GenerateOutput(title=title, body=body, labels=labels)


def _collect_diff(git: Any) -> str:
    parts: list[str] = []
    try:
        staged = git.get_diff()
    except GitError:
        staged = ""
    if staged:
        parts.extend(["Staged changes:\n", staged, "\n"])

    try:
        git.run_interactive("add", "--intent-to-add", ".")
    except GitError:
        return "".join(parts)
    try:
        unstaged = git.get_diff()
    except GitError:
        unstaged = ""
    if unstaged:
        parts.extend(["\nUnstaged changes:\n", unstaged])
    try:
        git.run_interactive("restore", "--staged", ".")
    except GitError:
        pass
    return "".join(parts)


def generate_ai_pr_content(git: Any, client: Any) -> PRForm:
    """Build a pull request form for the current branch from its diff and commits.

    ``client.get_pr_template()`` supplies the repository's template, if any.
    """
    try:
        branch = git.current_branch()
    except GitError as exc:
        raise GitError(f"failed to get current branch: {exc}") from exc

    try:
        default_branch = git.default_branch()
    except GitError:
        default_branch = _DEFAULT_BRANCH_FALLBACK

    diff = _collect_diff(git)

    try:
        commits = git.log(f"{default_branch}..{branch}", 0, False, False)
    except GitError as exc:
        raise GitError(f"failed to get branch commit history: {exc}") from exc

    try:
        template = client.get_pr_template() or ""
    except Exception:
        template = ""

    content = generate_pr_content(
        GenerateInput(
            branch=branch,
            default_branch=default_branch,
            diff=diff,
            commits=commits,
            template=template,
        )
    )
    form = PRForm(
        title=content.title,
        body=content.body,
        base=default_branch,
        labels=content.labels,
    )

    print(f"\n{green('✓')} Generated PR Title: {form.title}")
    print(f"\n{green('✓')} Generated PR Description:\n{truncate_body(form.body, 10, 80)}\n")
    return form