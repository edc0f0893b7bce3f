# sagegit

A library of building blocks for a friendlier git workflow:

- **Argument checking** (`sagegit.git.validate`): reference names, file
  paths and command arguments are checked for shell metacharacters,
  malformed ref syntax and path traversal before anything is run, and
  `setup_secure_command` builds a `SecureCommand` that runs with a trimmed
  environment (`PATH`, `HOME`, `USER`, `LANG`, `LC_ALL`, plus
  `GIT_TERMINAL_PROMPT=0` and any `GIT_DIR`, `GIT_WORK_TREE`, `GIT_CONFIG`
  for git).
- **A git service interface** (`sagegit.git.service`): the abstract
  `GitService` lists the repository operations (branching, committing,
  pushing, stashing, merge and rebase state, divergence counts, …); every
  method raises `GitError` on failure.
- **An in-memory backend** (`sagegit.git.mock`): `MockGit` implements
  `GitService`, keeps a small repository state and counts calls, for tests.
- **Pull request drafting** (`sagegit.ui.ai_pr`, `sagegit.ui.pr_template`):
  turns a branch name, commit log, diff and optional repository template
  into a title, body and label suggestions.
- **Terminal output** (`sagegit.ui.style`, `sagegit.ui.spinner`,
  `sagegit.ui.sync_progress`, `sagegit.ui.pr_form`): coloured messages,
  prompts, a spinner and a step-by-step progress tracker.
- **Version and update checks** (`sagegit.version`,
  `sagegit.update.checker`).

## Validating arguments

```python
from sagegit.git.validate import ValidationError, validate_ref

validate_ref("feature/login-page")      # returns the name unchanged

try:
    validate_ref("main; rm -rf /")
except ValidationError as exc:
    print(exc)                          # invalid characters in reference name
```

`validate_git_args` checks a whole git argument list, applying the looser
rules to commit messages after `-m`, revision ranges for `log`, `diff`,
`rev-list`, `show` and `blame`, and temporary message files after `-F`.

## Testing against an in-memory repository

```python
from sagegit.git.mock import MockGit

git = MockGit()
git.add_branch("feature/x")
git.checkout("feature/x")
assert git.current_branch() == "feature/x"
assert git.call_count("checkout") == 1
```

`MockGit.commit` raises `GitError("no changes to commit")` unless
`allow_empty` is set, and `stash_pop` raises when the stash is empty.

## Drafting a pull request

```python
from sagegit.ui.ai_pr import generate_pr_content
from sagegit.ui.pr_template import GenerateInput

out = generate_pr_content(
    GenerateInput(branch="feat/ui/add-dark-mode", commits="feat(ui): add dark mode toggle")
)
print(out.title)    # feat(ui): add dark mode
print(out.labels)   # ['feature']
```

With a `template`, the known sections (description, changes, testing,
breaking changes) are filled in and others are kept as they are; without
one, a full body is written with changes grouped by commit type.
`generate_ai_pr_content(git, client)` gathers the branch, diff and commits
from a `GitService` and the template from `client.get_pr_template()`, and
returns a `PRForm`. `ask_pr_form` lets the user review it with click
prompts and an editor.

`truncate_body(body, max_lines, max_line_length)` gives a short preview:
section headers, each followed by at most three non-empty lines, with long
lines cut and marked `...`.

## Progress display

```python
from sagegit.ui.sync_progress import SyncProgress

progress = SyncProgress()
progress.start_step("fetch")
progress.complete_step("fetch", True)
progress.skip_step("push")
print(progress.summary())
```

The spinner only animates when its stream is a terminal; the final
`✓`/`✗` line is always written.

## Version and updates

```python
from sagegit import version
from sagegit.update.checker import check_for_updates_public

check_for_updates_public(version.get())
```

The check runs at most once a day; the time of the last check is stored in
`update_check.json` under `~/.config/sage` (or `%APPDATA%\sage` on
Windows). Development versions (`dev` or empty) are never checked, and
failures are silent. The public check reads the repository to ask about,
as `owner/name`, from the `SAGE_RELEASE_REPO` environment variable;
`check_for_updates(client, current_version)` asks
`client.get_latest_release()` instead.

## What this package does not do

- There is no git backend that runs the `git` program: `GitService` is an
  interface and `MockGit` is the only implementation provided.
- There is no undo history; the `sagegit.undo` package holds no modules.
- There is no command-line program; everything here is used as a library.