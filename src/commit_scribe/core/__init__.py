"""Core business logic for commit-scribe.

This module contains the fundamental building blocks:
- Conventional commit parsing and formatting
- Semantic version parsing and bumping
- Commit message validation
- Changelog classification, rendering and output
"""

from __future__ import annotations

from commit_scribe.core.changelog import (
    ChangelogDocument,
    ChangelogOptions,
    ChangelogScope,
    build_changelog,
    generate_changelog,
    group_commits_by_type,
    parse_commits,
    resolve_template,
)
from commit_scribe.core.message import Author, CommitMessage
from commit_scribe.core.output import ChangelogWriter, output_changelog
from commit_scribe.core.render import MarkdownRenderer
from commit_scribe.core.validation import Violation, collect_violations, validate, validate_batch
from commit_scribe.core.version import BumpType, SemVer, bump_version, select_bump

__all__ = [
    # Message
    "Author",
    # Version
    "BumpType",
    # Changelog
    "ChangelogDocument",
    "ChangelogOptions",
    "ChangelogScope",
    "ChangelogWriter",
    "CommitMessage",
    "MarkdownRenderer",
    "SemVer",
    # Validation
    "Violation",
    "build_changelog",
    "bump_version",
    "collect_violations",
    "generate_changelog",
    "group_commits_by_type",
    "output_changelog",
    "parse_commits",
    "resolve_template",
    "select_bump",
    "validate",
    "validate_batch",
]
