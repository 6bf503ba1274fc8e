"""Tests for changelog output sinks."""

from __future__ import annotations

import io
import subprocess
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from commit_scribe.core.output import ChangelogWriter, copy_to_clipboard, output_changelog
from commit_scribe.exceptions import WriteError

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200)


class TestChangelogWriter:
    """Tests for ChangelogWriter."""

    def test_write_new_file(self, tmp_path: Path):
        """Content is written to a new file."""
        path = ChangelogWriter(tmp_path).write("# Changelog\n", "CHANGELOG.md")

        assert path == tmp_path / "CHANGELOG.md"
        assert path.read_text() == "# Changelog\n"

    def test_write_replaces_existing(self, tmp_path: Path):
        """Without append the file is replaced."""
        target = tmp_path / "CHANGELOG.md"
        target.write_text("old\n")

        ChangelogWriter(tmp_path).write("new\n", target)

        assert target.read_text() == "new\n"

    def test_append_adds_separator(self, tmp_path: Path):
        """Appending separates new content with a blank line."""
        target = tmp_path / "CHANGELOG.md"
        target.write_text("# Changelog\n")

        ChangelogWriter(tmp_path).write("## v1.1.0\n", target, append=True)

        assert target.read_text() == "# Changelog\n\n\n## v1.1.0\n"

    def test_append_to_missing_file(self, tmp_path: Path):
        """Appending to a missing file just creates it."""
        target = tmp_path / "CHANGELOG.md"

        ChangelogWriter(tmp_path).write("## v1.0.0\n", target, append=True)

        assert target.read_text() == "## v1.0.0\n"

    def test_directory_gets_default_name(self, tmp_path: Path):
        """A directory target writes CHANGELOG.md inside it."""
        docs = tmp_path / "docs"
        docs.mkdir()

        path = ChangelogWriter(tmp_path).write("content\n", "docs")

        assert path == docs / "CHANGELOG.md"
        assert path.read_text() == "content\n"

    def test_creates_parent_directories(self, tmp_path: Path):
        """Missing parent directories are created."""
        path = ChangelogWriter(tmp_path).write("content\n", "release/notes/CHANGES.md")

        assert path.read_text() == "content\n"

    def test_default_path(self, tmp_path: Path):
        """Without a path CHANGELOG.md in the root is used."""
        assert ChangelogWriter(tmp_path).write("x\n") == tmp_path / "CHANGELOG.md"

    def test_write_failure(self, tmp_path: Path):
        """OS errors become WriteError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")

        with pytest.raises(WriteError) as exc_info:
            ChangelogWriter(tmp_path).write("x\n", "blocker/CHANGELOG.md")

        assert exc_info.value.path == str(tmp_path / "blocker" / "CHANGELOG.md")


class TestCopyToClipboard:
    """Tests for clipboard support."""

    def test_first_available_command(self):
        """The first installed clipboard command receives the text."""
        available = {"xclip"}

        with (
            patch("shutil.which", side_effect=lambda name: name if name in available else None),
            patch("subprocess.run") as mock_run,
        ):
            assert copy_to_clipboard("hello") is True

        command = mock_run.call_args.args[0]
        assert command[0] == "xclip"
        assert mock_run.call_args.kwargs["input"] == "hello"

    def test_no_command_available(self):
        """Without a clipboard command the copy fails."""
        with patch("shutil.which", return_value=None):
            assert copy_to_clipboard("hello") is False

    def test_failing_command_falls_through(self):
        """A failing command is skipped in favour of the next one."""
        with (
            patch("shutil.which", side_effect=lambda name: name),
            patch(
                "subprocess.run",
                side_effect=[subprocess.CalledProcessError(1, "pbcopy"), MagicMock()],
            ) as mock_run,
        ):
            assert copy_to_clipboard("hello") is True

        assert mock_run.call_count == 2


class TestOutputChangelog:
    """Tests for output_changelog."""

    def test_stdout(self, console: Console, tmp_path: Path):
        """Content is printed verbatim to the console."""
        content = "# Changelog\n\n- :bug: [fix] thing\n"

        result = output_changelog(
            content, console=console, stdout=True, writer=ChangelogWriter(tmp_path)
        )

        assert result is None
        assert console.file.getvalue() == content
        assert not (tmp_path / "CHANGELOG.md").exists()

    def test_copy(self, console: Console):
        """Content is handed to the clipboard."""
        clipboard = MagicMock(return_value=True)

        assert output_changelog("x\n", console=console, copy=True, clipboard=clipboard) is None
        clipboard.assert_called_once_with("x\n")

    def test_copy_failure(self, console: Console):
        """A failed copy raises WriteError."""
        with pytest.raises(WriteError, match="clipboard"):
            output_changelog(
                "x\n", console=console, copy=True, clipboard=MagicMock(return_value=False)
            )

    def test_file(self, console: Console, tmp_path: Path):
        """By default the content is written to a file."""
        path = output_changelog(
            "x\n", console=console, path="CHANGES.md", writer=ChangelogWriter(tmp_path)
        )

        assert path == tmp_path / "CHANGES.md"
        assert path.read_text() == "x\n"
