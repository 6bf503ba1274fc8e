"""Conventional commit message parsing and formatting.

A message has the shape::

    type(scope)!: short description

    long description

    BREAKING CHANGE: description

Parsing never fails: text that does not follow the convention degrades to
a message whose whole header is the short description.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from commit_scribe.core.emoji import is_alias_token, leading_glyph_to_alias

if TYPE_CHECKING:
    from datetime import datetime

    from commit_scribe.vcs.git import Commit

HEADER_PATTERN = re.compile(
    r"^(?P<type>:\w+:|\w+)"
    r"(?P<bang>!)?"
    r" ?(?:\((?P<scope>[^()]*)\))?"
    r"(?P<bang_after_scope>!)?"
    r"(?P<colon>:)?"
    r"\s*(?P<description>.*)$"
)

BREAKING_CHANGE_TOKEN = "BREAKING CHANGE:"
BREAKING_CHANGE_PATTERN = re.compile(r"^BREAKING CHANGE:[ \t]*", re.MULTILINE)

CHANGELOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SHORT_HASH_LENGTH = 7


@dataclass(frozen=True)
class Author:
    """Commit author identity and authoring time (timezone-aware)."""

    name: str
    email: str = ""
    date: datetime | None = None


@dataclass(frozen=True)
class CommitMessage:
    """Immutable structured representation of a conventional commit."""

    type: str | None = None
    scope: str | None = None
    short_description: str | None = None
    long_description: str | None = None
    breaking_changes: bool = False
    breaking_changes_description: str | None = None
    commit_id: str | None = None
    author: Author | None = None

    def __post_init__(self) -> None:
        if self.breaking_changes_description and not self.breaking_changes:
            raise ValueError("breaking_changes_description requires breaking_changes=True")

    @property
    def short_hash(self) -> str:
        return self.commit_id[:SHORT_HASH_LENGTH] if self.commit_id else ""

    @classmethod
    def parse(
        cls,
        text: str | None,
        *,
        commit_id: str | None = None,
        author: Author | None = None,
    ) -> CommitMessage:
        """Parse raw commit text into a CommitMessage.

        Args:
            text: Full commit message (header and optional body)
            commit_id: Commit hash the message belongs to, if any
            author: Commit author, if any

        Returns:
            Parsed message; blank input yields an all-empty message
        """
        if text is None or not text.strip():
            return cls(commit_id=commit_id, author=author)

        header, _, body = text.strip().partition("\n")
        header = leading_glyph_to_alias(header.strip())

        commit_type: str | None = None
        scope: str | None = None
        breaking = False
        description: str | None = header

        match = HEADER_PATTERN.match(header)
        # A bare-word type needs the colon; an alias type may omit it
        if match and (match.group("colon") or is_alias_token(match.group("type"))):
            commit_type = match.group("type")
            scope = _blank_to_none(match.group("scope"))
            breaking = bool(match.group("bang") or match.group("bang_after_scope"))
            description = _blank_to_none(match.group("description"))

        long_description = _blank_to_none(body)
        breaking_description: str | None = None
        if long_description and BREAKING_CHANGE_PATTERN.search(long_description):
            before, after = BREAKING_CHANGE_PATTERN.split(long_description, maxsplit=1)
            long_description = _blank_to_none(before)
            breaking_description = _blank_to_none(after)
            breaking = True

        return cls(
            type=commit_type,
            scope=scope,
            short_description=description,
            long_description=long_description,
            breaking_changes=breaking,
            breaking_changes_description=breaking_description,
            commit_id=commit_id,
            author=author,
        )

    @classmethod
    def from_commit(cls, commit: Commit) -> CommitMessage:
        """Parse the message of a repository commit, keeping its hash and author."""
        return cls.parse(
            commit.message,
            commit_id=commit.sha,
            author=Author(commit.author_name, commit.author_email, commit.date),
        )

    def format(self) -> str:
        """Format as canonical conventional commit text.

        The result has no trailing newline and is suitable for writing to
        git's commit message file.
        """
        parts = [self.type or ""]
        if not _is_blank(self.scope):
            if is_alias_token(self.type):
                parts.append(" ")
            parts.append(f"({self.scope.strip()})")
        if self.breaking_changes:
            parts.append("!")
        if not _is_blank(self.short_description):
            parts.append(f": {self.short_description.strip()}")
        if not _is_blank(self.long_description):
            parts.append(f"\n\n{self.long_description.strip()}")
        if not _is_blank(self.breaking_changes_description):
            parts.append(f"\n\n{BREAKING_CHANGE_TOKEN} {self.breaking_changes_description.strip()}")
        return "".join(parts)

    def format_for_changelog(self, template: str) -> str:
        """Render this message through a changelog entry template.

        Supported placeholders: ``{type}``, ``{scope}``, ``{description}``,
        ``{hash}``, ``{shortHash}``, ``{breakingChanges}``, ``{author}`` and
        ``{date}``. Absent values become empty strings; an empty ``()`` and
        a dangling leading ``: `` are removed afterwards.
        """
        date = ""
        if self.author is not None and self.author.date is not None:
            # datetime keeps the author's own offset
            date = self.author.date.strftime(CHANGELOG_DATE_FORMAT)

        values = {
            "{type}": _strip_or_empty(self.type),
            "{scope}": _strip_or_empty(self.scope),
            "{description}": _strip_or_empty(self.short_description),
            "{hash}": self.commit_id or "",
            "{shortHash}": self.short_hash,
            "{breakingChanges}": "!" if self.breaking_changes else "",
            "{author}": self.author.name if self.author and self.author.name else "",
            "{date}": date,
        }

        result = template
        for placeholder, value in values.items():
            result = result.replace(placeholder, value)

        result = re.sub(r"\s?\(\)", "", result)
        result = re.sub(r"^:\s+", "", result)
        return result.lstrip()


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _blank_to_none(value: str | None) -> str | None:
    return None if _is_blank(value) else value.strip()


def _strip_or_empty(value: str | None) -> str:
    return "" if _is_blank(value) else value.strip()
