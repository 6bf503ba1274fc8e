"""Implementation of the 'changelog' command.

The changelog command renders the commits of a revision range as Markdown
and sends the result to a file, the clipboard or standard output.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from commit_scribe.config import load_config
from commit_scribe.core.changelog import ChangelogOptions, build_changelog
from commit_scribe.core.output import ChangelogWriter, output_changelog
from commit_scribe.core.version import select_bump
from commit_scribe.exceptions import CommitScribeError
from commit_scribe.vcs import GitRepository, RevisionResolver

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(
    rev_spec: str | None,
    *,
    project: str | None = None,
    subtitle: str | None = None,
    no_subtitle: bool = False,
    last_tag: bool = False,
    for_tag: str | None = None,
    major: bool = False,
    minor: bool = False,
    patch: bool = False,
    append: bool = False,
    copy: bool = False,
    stdout: bool = False,
    output_path: str | None = None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        rev_spec: Revision or ``start..end`` range (HEAD when omitted)
        project: Directory inside the repository (defaults to cwd)
        subtitle: Explicit subtitle, overrides the version subtitle
        no_subtitle: Render without a subtitle
        last_tag: Use the commits since the latest tag
        for_tag: Use the commits between the previous tag and this tag
        major: Bump the major version for the subtitle
        minor: Bump the minor version for the subtitle
        patch: Bump the patch version for the subtitle
        append: Append to the changelog file instead of replacing it
        copy: Copy the changelog to the clipboard
        stdout: Print the changelog instead of writing a file
        output_path: Changelog file or directory (config value when omitted)
        console: Console for standard output
        err_console: Console for error output
    """
    conflicts = [
        (copy and stdout, "--copy and --stdout"),
        (bool(subtitle) and no_subtitle, "--subtitle and --no-subtitle"),
        (last_tag and bool(for_tag), "--last-tag and --for-tag"),
    ]
    for conflict, flags in conflicts:
        if conflict:
            err_console.print(f"[red]Error:[/] {flags} cannot be used together")
            raise SystemExit(1)

    project_path = Path(project) if project else Path.cwd()

    try:
        config = load_config(project_path)
    except CommitScribeError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    options = ChangelogOptions(
        rev_spec=rev_spec,
        subtitle=subtitle,
        no_subtitle=no_subtitle,
        last_tag=last_tag,
        for_tag=for_tag,
        bump=select_bump(major=major, minor=minor, patch=patch),
        append=append,
    )

    try:
        repo = GitRepository(project_path)
        content = build_changelog(RevisionResolver(repo), config, options)
    except CommitScribeError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if content is None:
        if not stdout:
            err_console.print("[yellow]No conventional commits found. Nothing to write.[/]")
        return

    try:
        written = output_changelog(
            content,
            console=console,
            path=output_path or config.changelog.path,
            append=append,
            copy=copy,
            stdout=stdout,
            writer=ChangelogWriter(repo.path),
        )
    except CommitScribeError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if copy:
        err_console.print("[green]✓[/] Copied changelog to the clipboard")
    elif written is not None:
        action = "Appended" if append else "Wrote"
        err_console.print(f"[green]✓[/] {action} changelog to [cyan]{escape(str(written))}[/]")
