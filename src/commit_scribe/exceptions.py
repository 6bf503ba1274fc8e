"""Exception hierarchy for commit-scribe.

Every error raised on purpose by the package derives from
:class:`CommitScribeError`, so the CLI can report it without a traceback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from commit_scribe.core.validation import Violation


class CommitScribeError(Exception):
    """Base class for all commit-scribe errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(CommitScribeError):
    """Configuration is missing something the operation requires."""


class ConfigNotFoundError(ConfigurationError):
    """A configuration file could not be found or read."""


class ConfigValidationError(ConfigurationError):
    """A configuration file contains invalid values."""


# =============================================================================
# Git
# =============================================================================


class GitError(CommitScribeError):
    """Base class for repository access errors."""


class NotARepositoryError(GitError):
    """The given path is not inside a git repository."""


class RevisionNotFoundError(GitError):
    """A revision specifier does not resolve to any object."""

    def __init__(self, rev_spec: str | None) -> None:
        self.rev_spec = rev_spec
        super().__init__(f"Revision not found: {rev_spec!r}")


class UnsupportedObjectTypeError(GitError):
    """A revision resolved to an object that is neither a commit nor a tag."""

    def __init__(self, object_id: str, type_name: str) -> None:
        self.object_id = object_id
        self.type_name = type_name
        super().__init__(f"Unsupported object type '{type_name}' for {object_id}")


class MissingObjectError(GitError):
    """An object id is not present in the repository database."""

    def __init__(self, object_id: str) -> None:
        self.object_id = object_id
        super().__init__(f"Object not found in repository: {object_id}")


# =============================================================================
# Changelog
# =============================================================================


class ChangelogError(CommitScribeError):
    """Changelog generation failed."""


class WriteError(ChangelogError):
    """The changelog could not be written to its output sink."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


# =============================================================================
# Validation
# =============================================================================


class CommitValidationError(CommitScribeError):
    """One or more commit messages violate the configured rules.

    Carries either the violations of a single message or, for batch
    validation, the violations of every offending message keyed by its
    identifier.
    """

    def __init__(
        self,
        violations: Sequence[Violation] = (),
        *,
        violations_by_id: Mapping[str, Sequence[Violation]] | None = None,
    ) -> None:
        self.violations = list(violations)
        self.violations_by_id = {
            key: list(items) for key, items in (violations_by_id or {}).items()
        }
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = ["Commit message violations:"]
        for violation in self.violations:
            lines.append(f" - {violation}")
        for key, violations in self.violations_by_id.items():
            lines.append(f" - {key}:")
            lines.extend(f"    - {violation}" for violation in violations)
        return "\n".join(lines)
