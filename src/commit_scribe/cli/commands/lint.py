"""Implementation of the 'lint' command.

Checks either a single message given on the command line or every commit
of a revision range against the configured rules.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from commit_scribe.config import load_config
from commit_scribe.core.message import CommitMessage
from commit_scribe.core.validation import validate, validate_batch
from commit_scribe.exceptions import CommitScribeError, CommitValidationError
from commit_scribe.vcs import GitRepository, RevisionResolver

if TYPE_CHECKING:
    from rich.console import Console


def run_lint(
    rev_spec: str | None,
    *,
    message: str | None = None,
    project: str | None = None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the lint command.

    Args:
        rev_spec: Revision or ``start..end`` range whose commits are checked
        message: Message text to check instead of repository commits
        project: Directory inside the repository (defaults to cwd)
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(project) if project else Path.cwd()

    try:
        config = load_config(project_path)
    except CommitScribeError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        if message is not None:
            validate(CommitMessage.parse(message), config, raise_on_error=True)
            console.print("[green]✓[/] Commit message is valid")
            return

        repo = GitRepository(project_path)
        commits = RevisionResolver(repo).resolve(rev_spec, config.lint.ignored)
        validate_batch({c.sha: CommitMessage.from_commit(c) for c in commits}, config)
    except CommitValidationError as e:
        err_console.print(str(e), markup=False, highlight=False, emoji=False)
        raise SystemExit(1) from e
    except CommitScribeError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    noun = "commit" if len(commits) == 1 else "commits"
    console.print(f"[green]✓[/] {len(commits)} {noun} checked, no violations")
