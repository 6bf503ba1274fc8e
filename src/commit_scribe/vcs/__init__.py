"""Version control access."""

from __future__ import annotations

from commit_scribe.vcs.git import Commit, GitRepository, ObjectInfo, ObjectKind
from commit_scribe.vcs.resolver import RepositoryReader, RevisionResolver, filter_ignored

__all__ = [
    "Commit",
    "GitRepository",
    "ObjectInfo",
    "ObjectKind",
    "RepositoryReader",
    "RevisionResolver",
    "filter_ignored",
]
