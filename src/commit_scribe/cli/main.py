"""CLI entry point for commit-scribe."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from commit_scribe import __version__
from commit_scribe.cli.commands.changelog import run_changelog
from commit_scribe.cli.commands.hook import run_hook
from commit_scribe.cli.commands.lint import run_lint

app = typer.Typer(
    name="commit-scribe",
    help="Lint conventional commits and generate changelogs from git history.",
    no_args_is_help=True,
)

ProjectOption = Annotated[
    str | None,
    typer.Option("--project", "-C", help="Directory inside the repository (default: cwd)"),
]


def _consoles() -> tuple[Console, Console]:
    return Console(), Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        Console().print(f"commit-scribe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = False,
) -> None:
    """Global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


@app.command()
def changelog(
    rev_spec: Annotated[
        str | None, typer.Argument(help="Revision or START..END range (default: HEAD)")
    ] = None,
    subtitle: Annotated[
        str | None, typer.Option("--subtitle", "-s", help="Subtitle, e.g. a version")
    ] = None,
    no_subtitle: Annotated[
        bool, typer.Option("--no-subtitle", help="Render without a subtitle")
    ] = False,
    last_tag: Annotated[
        bool, typer.Option("--last-tag", help="Use the commits since the latest tag")
    ] = False,
    for_tag: Annotated[
        str | None,
        typer.Option("--for-tag", help="Use the commits between the previous tag and TAG"),
    ] = None,
    major: Annotated[bool, typer.Option("--major", help="Subtitle with a major bump")] = False,
    minor: Annotated[bool, typer.Option("--minor", help="Subtitle with a minor bump")] = False,
    patch: Annotated[bool, typer.Option("--patch", help="Subtitle with a patch bump")] = False,
    append: Annotated[
        bool, typer.Option("--append", "-a", help="Append to the changelog file")
    ] = False,
    copy: Annotated[bool, typer.Option("--copy", help="Copy to the clipboard")] = False,
    stdout: Annotated[bool, typer.Option("--stdout", help="Print instead of writing")] = False,
    path: Annotated[
        str | None, typer.Option("--path", "-p", help="Changelog file or directory")
    ] = None,
    project: ProjectOption = None,
) -> None:
    """Generate a Markdown changelog from conventional commits."""
    console, err_console = _consoles()
    run_changelog(
        rev_spec,
        project=project,
        subtitle=subtitle,
        no_subtitle=no_subtitle,
        last_tag=last_tag,
        for_tag=for_tag,
        major=major,
        minor=minor,
        patch=patch,
        append=append,
        copy=copy,
        stdout=stdout,
        output_path=path,
        console=console,
        err_console=err_console,
    )


@app.command()
def lint(
    rev_spec: Annotated[
        str | None, typer.Argument(help="Revision or START..END range (default: HEAD)")
    ] = None,
    message: Annotated[
        str | None, typer.Option("--message", "-m", help="Check this message instead")
    ] = None,
    project: ProjectOption = None,
) -> None:
    """Check commit messages against the configured rules."""
    console, err_console = _consoles()
    run_lint(rev_spec, message=message, project=project, console=console, err_console=err_console)


@app.command()
def hook(
    message_file: Annotated[str, typer.Argument(help="Commit message file passed by git")],
    project: ProjectOption = None,
) -> None:
    """Validate and normalize a commit message (for git's commit-msg hook)."""
    console, err_console = _consoles()
    run_hook(message_file, project=project, console=console, err_console=err_console)


if __name__ == "__main__":
    app()
