"""Implementation of the 'hook' command.

Meant to be called from git's ``commit-msg`` hook with the path of the
message file. The message is validated and rewritten in canonical form;
a non-zero exit aborts the commit.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from commit_scribe.config import load_config
from commit_scribe.core.message import CommitMessage
from commit_scribe.core.validation import validate
from commit_scribe.exceptions import CommitScribeError, CommitValidationError

if TYPE_CHECKING:
    from rich.console import Console

COMMENT_PREFIX = "#"
# Everything below this line is diff context added by `git commit --verbose`
SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def strip_comments(text: str) -> str:
    """Drop git's comment lines and any verbose diff below the scissors line."""
    lines: list[str] = []
    for line in text.splitlines():
        if line.rstrip() == SCISSORS_LINE:
            break
        if line.startswith(COMMENT_PREFIX):
            continue
        lines.append(line)
    return "\n".join(lines)


def run_hook(
    message_file: str,
    *,
    project: str | None = None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the hook command.

    Args:
        message_file: Commit message file written by git
        project: Directory to load configuration from (defaults to cwd)
        console: Console for standard output
        err_console: Console for error output
    """
    path = Path(message_file)
    project_path = Path(project) if project else Path.cwd()

    try:
        config = load_config(project_path)
    except CommitScribeError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Error reading {escape(str(path))}:[/] {e}")
        raise SystemExit(1) from e

    message = CommitMessage.parse(strip_comments(raw))
    try:
        validate(message, config, raise_on_error=True)
    except CommitValidationError as e:
        err_console.print(str(e), markup=False, highlight=False, emoji=False)
        raise SystemExit(1) from e

    try:
        path.write_text(message.format(), encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Error writing {escape(str(path))}:[/] {e}")
        raise SystemExit(1) from e

    console.print("[green]✓[/] Commit message is valid", highlight=False)
