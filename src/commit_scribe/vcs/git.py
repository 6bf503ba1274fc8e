"""Read-only git repository access via GitPython.

This module is the repository collaborator used by the revision
resolver and the changelog pipeline. It only reads objects, refs and
history; nothing here writes to the repository.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from git import Repo
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from commit_scribe.exceptions import (
    GitError,
    MissingObjectError,
    NotARepositoryError,
    RevisionNotFoundError,
    UnsupportedObjectTypeError,
)

if TYPE_CHECKING:
    from datetime import datetime

    from git.objects import Commit as GitCommit

logger = logging.getLogger(__name__)

# Suffix appended by `git describe`, e.g. "v1.2.0-3-gabc1234"
DESCRIBE_SUFFIX = re.compile(r"-(\d+)-g[0-9a-f]+$")

SHORT_SHA_LENGTH = 7


@dataclass(frozen=True)
class Commit:
    """A commit as read from the repository."""

    sha: str
    message: str
    author_name: str
    author_email: str
    date: datetime

    @property
    def short_sha(self) -> str:
        return self.sha[:SHORT_SHA_LENGTH]


class ObjectKind(StrEnum):
    """Classification of a git object for revision resolution."""

    COMMIT = "commit"
    TAG = "tag"
    OTHER = "other"


@dataclass(frozen=True)
class ObjectInfo:
    """Result of classifying an object id.

    Attributes:
        kind: Whether the object is a commit, an annotated tag or anything else
        object_id: The classified object id
        target: Commit id the object designates (itself for commits)
        type_name: Raw git object type, used in error messages
    """

    kind: ObjectKind
    object_id: str
    target: str | None
    type_name: str


class GitRepository:
    """Git repository wrapper implementing the repository reader protocol."""

    def __init__(self, path: Path | str | None = None) -> None:
        """Open the repository containing path.

        Args:
            path: Any directory inside the work tree (defaults to cwd)

        Raises:
            NotARepositoryError: If no repository encloses path
        """
        start = Path(path) if path is not None else Path.cwd()
        try:
            self._repo = Repo(start, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotARepositoryError(f"Not a git repository: {start}") from e

        self.path = Path(self._repo.working_tree_dir or self._repo.git_dir)

    def resolve(self, rev: str) -> str | None:
        """Resolve a revision to an object id, or None if it does not exist."""
        try:
            return self._repo.rev_parse(rev).hexsha
        except (BadName, BadObject, ValueError):
            return None

    def classify(self, object_id: str) -> ObjectInfo:
        """Classify an object, dereferencing annotated tags.

        Raises:
            MissingObjectError: If the object is not in the repository
        """
        try:
            obj = self._repo.rev_parse(object_id)
        except (BadName, BadObject, ValueError) as e:
            raise MissingObjectError(object_id) from e

        if obj.type == "commit":
            return ObjectInfo(ObjectKind.COMMIT, obj.hexsha, obj.hexsha, obj.type)

        if obj.type == "tag":
            target = obj
            while target.type == "tag":
                target = target.object
            if target.type == "commit":
                return ObjectInfo(ObjectKind.TAG, obj.hexsha, target.hexsha, obj.type)
            return ObjectInfo(ObjectKind.OTHER, obj.hexsha, None, target.type)

        return ObjectInfo(ObjectKind.OTHER, obj.hexsha, None, obj.type)

    def commits_between(self, start_id: str | None, end_id: str) -> list[Commit]:
        """List commits reachable from end_id but not from start_id, newest first.

        A start_id of None lists the whole history of end_id.
        """
        rev = f"{start_id}..{end_id}" if start_id else end_id
        try:
            return [_to_commit(c) for c in self._repo.iter_commits(rev)]
        except GitCommandError as e:
            raise GitError(f"Failed to list commits for {rev}: {e.stderr.strip()}") from e

    def get_commit(self, commit_id: str) -> Commit:
        try:
            return _to_commit(self._repo.commit(commit_id))
        except (BadName, BadObject, ValueError) as e:
            raise MissingObjectError(commit_id) from e

    def latest_tag(self) -> str | None:
        """Get the newest tag by commit time, or None if there are no tags."""
        tags = self._tags_by_commit_time()
        if not tags:
            return None
        return _normalize_tag(tags[0][0])

    def previous_tag(self, rev: str) -> str | None:
        """Get the newest tag whose commit is strictly older than rev's commit."""
        object_id = self.resolve(rev)
        if object_id is None:
            raise RevisionNotFoundError(rev)
        commit_time = self._repo.commit(object_id).committed_date

        for name, tag_time in self._tags_by_commit_time():
            if tag_time < commit_time:
                return _normalize_tag(name)
        return None

    def _tags_by_commit_time(self) -> list[tuple[str, int]]:
        tags: list[tuple[str, int]] = []
        for ref in self._repo.tags:
            try:
                commit = ref.commit
            except ValueError as e:
                raise UnsupportedObjectTypeError(ref.name, ref.object.type) from e
            tags.append((ref.name, commit.committed_date))

        tags.sort(key=lambda item: item[1], reverse=True)
        logger.debug("Found %d tags", len(tags))
        return tags


def _to_commit(commit: GitCommit) -> Commit:
    message = commit.message
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    return Commit(
        sha=commit.hexsha,
        message=message,
        author_name=commit.author.name or "",
        author_email=commit.author.email or "",
        date=commit.authored_datetime,
    )


def _normalize_tag(tag: str) -> str:
    return DESCRIBE_SUFFIX.sub("", tag)
