"""Revision specifier resolution.

Turns a revision specifier (a single ref, hash or tag, or an ``A..B``
range) into an ordered list of commits, and filters commits by
ignore patterns.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Protocol

from commit_scribe.core.emoji import to_alias
from commit_scribe.exceptions import RevisionNotFoundError, UnsupportedObjectTypeError
from commit_scribe.vcs.git import ObjectKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from commit_scribe.vcs.git import Commit, ObjectInfo

logger = logging.getLogger(__name__)

HEAD = "HEAD"
RANGE_SEPARATOR = ".."


class RepositoryReader(Protocol):
    """Read-only repository operations the resolver depends on."""

    def resolve(self, rev: str) -> str | None: ...

    def classify(self, object_id: str) -> ObjectInfo: ...

    def commits_between(self, start_id: str | None, end_id: str) -> list[Commit]: ...

    def get_commit(self, commit_id: str) -> Commit: ...

    def latest_tag(self) -> str | None: ...

    def previous_tag(self, rev: str) -> str | None: ...


class RevisionResolver:
    """Resolve revision specifiers against a repository."""

    def __init__(self, repository: RepositoryReader) -> None:
        self.repository = repository

    def resolve(
        self,
        rev_spec: str | None,
        ignored: Sequence[str] | None = None,
    ) -> list[Commit]:
        """Resolve a revision specifier to an ordered list of commits.

        Args:
            rev_spec: A ref, hash, tag or ``start..end`` range; blank means HEAD
            ignored: Regular expressions; matching commits are dropped

        Returns:
            Commits in resolution order (newest first for ranges)

        Raises:
            RevisionNotFoundError: If a revision does not resolve
            UnsupportedObjectTypeError: If a revision is not a commit or tag
            MissingObjectError: If a resolved object is absent
        """
        if not rev_spec or not rev_spec.strip():
            commits = [self.resolve_single(HEAD)]
        elif RANGE_SEPARATOR in rev_spec:
            start, end = rev_spec.split(RANGE_SEPARATOR, 1)
            commits = self.resolve_range(start, end)
        else:
            commits = [self.resolve_single(rev_spec.strip())]

        logger.debug("Resolved %r to %d commits", rev_spec, len(commits))
        return filter_ignored(commits, ignored)

    def resolve_single(self, rev: str) -> Commit:
        return self.repository.get_commit(self.resolve_commit_id(rev))

    def resolve_range(self, start: str, end: str | None = None) -> list[Commit]:
        """List commits in ``start..end`` plus start's own commit.

        The start commit is appended unless start names an annotated tag;
        there is no matching rule for end.
        """
        start = start.strip()
        end = (end or "").strip() or HEAD
        if not start:
            raise RevisionNotFoundError(f"{RANGE_SEPARATOR}{end}")

        start_id = self.resolve_commit_id(start)
        end_id = self.resolve_commit_id(end)

        commits = self.repository.commits_between(start_id, end_id)
        if not self.is_tag(start):
            commits.append(self.repository.get_commit(start_id))
        return commits

    def resolve_history(
        self,
        end: str = HEAD,
        ignored: Sequence[str] | None = None,
    ) -> list[Commit]:
        """List every commit reachable from end, newest first."""
        commits = self.repository.commits_between(None, self.resolve_commit_id(end))
        return filter_ignored(commits, ignored)

    def resolve_commit_id(self, rev: str) -> str:
        """Resolve rev to a commit id, dereferencing annotated tags."""
        object_id = self.repository.resolve(rev)
        if object_id is None:
            raise RevisionNotFoundError(rev)

        info = self.repository.classify(object_id)
        if info.kind is ObjectKind.OTHER or info.target is None:
            raise UnsupportedObjectTypeError(object_id, info.type_name)
        return info.target

    def is_tag(self, rev: str) -> bool:
        object_id = self.repository.resolve(rev)
        if object_id is None:
            return False
        return self.repository.classify(object_id).kind is ObjectKind.TAG


def filter_ignored(commits: list[Commit], patterns: Sequence[str] | None) -> list[Commit]:
    """Drop commits whose alias-normalized message matches any pattern.

    Patterns are used as given; a pattern containing emoji glyphs will not
    match the normalized message text.
    """
    if not patterns:
        return commits

    compiled = [re.compile(pattern) for pattern in patterns]
    kept = [
        c
        for c in commits
        if not any(pattern.search(to_alias(c.message)) for pattern in compiled)
    ]
    if len(kept) != len(commits):
        logger.debug("Ignored %d commits matching %s", len(commits) - len(kept), patterns)
    return kept
