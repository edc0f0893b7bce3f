"""Gathering pull request details from the user."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

import click

_PREVIEW_LINES_PER_SECTION = 3


@dataclass
class PRForm:
    """The details of a pull request to create."""

    title: str = ""
    body: str = ""
    base: str = ""
    draft: bool = False
    labels: list[str] = field(default_factory=list)
    reviewers: list[str] = field(default_factory=list)


def truncate_body(body: str, max_lines: int, max_line_length: int) -> str:
    """Return a preview of ``body``: section headers with a few lines under each."""
    if not body:
        return ""
    truncated: list[str] = []
    in_section = False
    shown = 0
    for line in body.split("\n"):
        if line.startswith("##"):
            in_section = True
            shown = 0
            truncated.append(line)
            continue
        if not in_section:
            continue
        if shown < _PREVIEW_LINES_PER_SECTION and line != "":
            if len(line) > max_line_length:
                line = line[:max_line_length] + "..."
            truncated.append(line)
            shown += 1
        elif shown == _PREVIEW_LINES_PER_SECTION:
            truncated.append("...")
            in_section = False
    if len(truncated) > max_lines:
        truncated = truncated[:max_lines] + ["..."]
    return "\n".join(truncated)


def non_empty_or(val: str, fallback: str) -> str:
    """Return ``val`` stripped, or ``fallback`` when it is blank."""
    stripped = val.strip()
    return stripped or fallback


def split_trim(s: str, sep: str) -> list[str]:
    """Split ``s`` on ``sep`` and keep the non-blank parts, stripped."""
    return [part.strip() for part in s.split(sep) if part.strip()]


def _prompt_text(message: str, default: str) -> str:
    return click.prompt(message, default=default, show_default=bool(default), type=str)


def ask_pr_form(initial: PRForm, client: Any) -> PRForm:
    """Ask the user for the pull request details, starting from ``initial``.

    When ``initial`` has no body, the repository's template from
    ``client.get_pr_template()`` is offered instead.
    """
    form = replace(initial, labels=list(initial.labels), reviewers=list(initial.reviewers))

    if not form.body:
        try:
            template = client.get_pr_template()
        except Exception:
            template = ""
        if template:
            print(f"\nUsing PR Template:\n{truncate_body(template, 10, 80)}\n")
            form.body = template
    else:
        print(f"\nProposed PR Description:\n{truncate_body(form.body, 15, 100)}\n")

    title = click.prompt("Pull Request Title", default=form.title or None, type=str)
    click.echo("Pull Request Description (body): opening editor")
    edited = click.edit(form.body, extension=".md")
    body = form.body if edited is None else edited
    base = _prompt_text("Base branch", non_empty_or(form.base, "main"))
    draft = click.confirm("Create as draft?", default=form.draft)
    labels = _prompt_text("Labels (comma separated)", ",".join(form.labels))
    reviewers = _prompt_text("Reviewers (comma separated usernames)", ",".join(form.reviewers))

    form.title = title
    form.body = body
    form.base = base
    form.draft = draft
    if labels:
        form.labels = split_trim(labels, ",")
    if reviewers:
        form.reviewers = split_trim(reviewers, ",")
    return form