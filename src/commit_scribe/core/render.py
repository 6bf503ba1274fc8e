"""Changelog renderers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from commit_scribe.core.emoji import to_glyph

if TYPE_CHECKING:
    from collections.abc import Iterable

    from commit_scribe.core.changelog import ChangelogDocument

BREAKING_CHANGES_HEADING = "Breaking Changes"
OTHER_CHANGES_HEADING = "Other"


class Renderer(Protocol):
    def render(self, document: ChangelogDocument, append: bool = False) -> str: ...


class MarkdownRenderer:
    """Render a changelog document as Markdown.

    Layout::

        # Title            (omitted when appending to an existing file)
        ## Subtitle
        ### Breaking Changes
        ### <one heading per section, in order>
        ### Other

    Empty buckets are left out. Output is deterministic and ends with a
    single newline.
    """

    def render(self, document: ChangelogDocument, append: bool = False) -> str:
        blocks: list[str] = []

        if not append and document.title and document.title.strip():
            blocks.append(_heading(to_glyph(document.title.strip()), 1))

        if document.subtitle and document.subtitle.strip():
            blocks.append(_heading(to_glyph(document.subtitle.strip()), 2))

        if document.breaking_changes:
            blocks.append(_heading(BREAKING_CHANGES_HEADING, 3))
            blocks.append(_bullets(document.breaking_changes))

        for title, items in document.sections:
            blocks.append(_heading(title, 3))
            blocks.append(_bullets(items))

        if document.other_changes:
            blocks.append(_heading(OTHER_CHANGES_HEADING, 3))
            blocks.append(_bullets(document.other_changes))

        return "\n\n".join(blocks) + "\n"


def _heading(text: str, level: int) -> str:
    return f"{'#' * level} {text}"


def _bullets(items: Iterable[str]) -> str:
    return "\n".join(f"- {item}" for item in items)
