"""Filling a repository's pull request template from branch and commit information."""

from __future__ import annotations

from dataclasses import dataclass

TESTING_CHECKLIST = (
    "This PR has been tested locally with the following checks:\n"
    "- [ ] Unit tests\n"
    "- [ ] Integration tests\n"
    "- [ ] Manual testing\n"
)

_SECTION_MARKERS = ("\n## ", "\n# ", "\r\n## ", "\r\n# ")

_PLACEHOLDERS = (
    "<!-- Write your description here -->",
    "<!-- Please include a summary of the changes -->",
    "<!-- Add your changes here -->",
    "<!-- List your changes here -->",
    "<!-- Describe your changes -->",
)

_SUMMARY_TITLES = frozenset({"description", "what does this pr do?", "summary", "overview"})
_CHANGES_TITLES = frozenset({"changes", "what changed?", "implementation details"})
_TESTING_TITLES = frozenset({"testing", "how has this been tested?", "test plan"})
_BREAKING_TITLES = frozenset({"breaking changes", "breaking"})

_INSTRUCTION_WORDS = ("please", "describe", "list")


@dataclass
class GenerateInput:
    """What is known about a branch when writing its pull request."""

    branch: str = ""
    default_branch: str = ""
    diff: str = ""
    commits: str = ""
    template: str = ""


def clean_github_markdown(template: str) -> str:
    """Drop HTML comment blocks and leading blank lines from a template."""
    cleaned: list[str] = []
    in_comment = False
    for line in template.split("\n"):
        trimmed = line.strip()
        if not cleaned and trimmed == "":
            continue
        if trimmed.startswith("<!--"):
            in_comment = not trimmed.endswith("-->")
            continue
        if trimmed.endswith("-->"):
            in_comment = False
            continue
        if in_comment:
            continue
        cleaned.append(line)
    return "\n".join(cleaned)


def split_into_sections(template: str) -> list[str]:
    """Split a template at its headings; every section after the first starts with ``## ``."""
    for marker in _SECTION_MARKERS:
        sections = template.split(marker)
        if len(sections) > 1:
            return [sections[0], *("## " + section for section in sections[1:])]
    return [template]


def extract_section_title(header: str) -> str:
    """Return the bare title of a heading line, without markers or emphasis."""
    title = header.lstrip("#").strip().removesuffix(":")
    for mark in ("`", "*", "_"):
        title = title.replace(mark, "").strip()
    return title


def fill_section_content(template: str, content: str) -> str:
    """Put ``content`` into a section's template text."""
    if not template.strip():
        return content
    for placeholder in _PLACEHOLDERS:
        if placeholder in template:
            return template.replace(placeholder, content, 1)
    lowered = template.lower()
    if any(word in lowered for word in _INSTRUCTION_WORDS):
        return template + "\n\n" + content
    if "- [ ]" in template or "* [ ]" in template:
        return template + "\n" + content
    return content


def generate_summary(data: GenerateInput) -> str:
    """Return the first commit line, which usually names the main change."""
    return data.commits.split("\n")[0]


def generate_changes(data: GenerateInput) -> str:
    """Return the commits as a bullet list."""
    return "".join(f"- {commit}\n" for commit in data.commits.split("\n") if commit.strip())


def _is_breaking(commit: str) -> bool:
    return "!:" in commit or "breaking change" in commit.lower()


def has_breaking_changes(data: GenerateInput) -> bool:
    """Return whether any commit announces a breaking change."""
    return any(_is_breaking(commit) for commit in data.commits.split("\n"))


def generate_breaking_changes(data: GenerateInput) -> str:
    """Return the breaking commits as a bullet list."""
    return "".join(f"- {commit}\n" for commit in data.commits.split("\n") if _is_breaking(commit))


def _fill_known_section(title: str, body: str, data: GenerateInput) -> str | None:
    key = title.lower()
    if key in _SUMMARY_TITLES:
        return fill_section_content(body, generate_summary(data))
    if key in _CHANGES_TITLES:
        return fill_section_content(body, generate_changes(data))
    if key in _TESTING_TITLES:
        return fill_section_content(body, TESTING_CHECKLIST)
    if key in _BREAKING_TITLES:
        content = "No breaking changes.\n"
        if has_breaking_changes(data):
            content = "This PR contains breaking changes:\n" + generate_breaking_changes(data)
        return fill_section_content(body, content)
    return None


def fill_template(template: str, data: GenerateInput) -> str:
    """Fill the sections of a pull request template that can be written from ``data``."""
    parts: list[str] = []
    for i, section in enumerate(split_into_sections(clean_github_markdown(template))):
        if not section.strip():
            continue
        if i > 0:
            parts.append("\n## ")
        lines = section.split("\n")
        title = extract_section_title(lines[0])
        if not title:
            parts.append(section)
            continue
        filled = _fill_known_section(title, "\n".join(lines[1:]), data)
        parts.append(section if filled is None else f"{title}\n{filled}")
        parts.append("\n")
    return "".join(parts).strip()