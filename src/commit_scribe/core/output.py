"""Changelog output sinks: file, clipboard and standard output."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from commit_scribe.exceptions import WriteError

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

logger = logging.getLogger(__name__)

DEFAULT_CHANGELOG_FILE = "CHANGELOG.md"
APPEND_SEPARATOR = "\n\n"

# Clipboard commands tried in order; the first one installed is used
CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class ChangelogWriter:
    """Write changelog content to a file."""

    def __init__(self, root: Path | None = None) -> None:
        """Create a writer.

        Args:
            root: Directory relative paths are resolved against (usually the
                repository work tree; defaults to cwd)
        """
        self.root = root or Path.cwd()

    def resolve_path(self, path: Path | str | None) -> Path:
        """Get the target file; an existing directory gets CHANGELOG.md inside it."""
        target = Path(path) if path else Path(DEFAULT_CHANGELOG_FILE)
        if not target.is_absolute():
            target = self.root / target
        if target.is_dir():
            target = target / DEFAULT_CHANGELOG_FILE
        return target

    def write(self, content: str, path: Path | str | None = None, *, append: bool = False) -> Path:
        """Write content, either replacing the file or appending to it.

        Appending to an existing file separates the new content with a
        blank line.

        Returns:
            Path of the written file

        Raises:
            WriteError: If the file cannot be written
        """
        target = self.resolve_path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if append:
                separator = APPEND_SEPARATOR if target.exists() else ""
                with target.open("a", encoding="utf-8") as f:
                    f.write(separator + content)
            else:
                target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"Failed to write changelog to {target}: {e}", path=str(target)) from e

        logger.debug("Wrote %d characters to %s", len(content), target)
        return target


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard.

    Returns:
        True if a clipboard command accepted the text
    """
    for command in CLIPBOARD_COMMANDS:
        if shutil.which(command[0]) is None:
            continue
        try:
            subprocess.run(command, input=text, text=True, check=True, capture_output=True)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.debug("Clipboard command %s failed: %s", command[0], e)
            continue
        return True

    logger.debug("No working clipboard command found on %s", sys.platform)
    return False


def output_changelog(
    content: str,
    *,
    console: Console,
    path: Path | str | None = None,
    append: bool = False,
    copy: bool = False,
    stdout: bool = False,
    writer: ChangelogWriter | None = None,
    clipboard: Callable[[str], bool] | None = None,
) -> Path | None:
    """Send rendered changelog content to exactly one sink.

    Returns:
        Path of the written file, or None for stdout and clipboard output

    Raises:
        WriteError: If the content cannot be delivered
    """
    if stdout:
        # Raw output: no wrapping, markup or :emoji: substitution
        console.out(content, highlight=False, end="")
        return None

    if copy:
        if not (clipboard or copy_to_clipboard)(content):
            raise WriteError("Failed to copy changelog to the clipboard")
        return None

    return (writer or ChangelogWriter()).write(content, path, append=append)
