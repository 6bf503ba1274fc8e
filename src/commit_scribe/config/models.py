"""Pydantic models for commit-scribe configuration.

All models have defaults, so an empty configuration is valid and yields
the conventional commit types and a Markdown changelog in CHANGELOG.md.
"""

from __future__ import annotations

import re
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_COMMIT_TYPES: dict[str, str] = {
    "feat": "A new feature",
    "fix": "A bug fix",
    "docs": "Documentation only changes",
    "style": "Changes that do not affect the meaning of the code",
    "refactor": "A code change that neither fixes a bug nor adds a feature",
    "perf": "A code change that improves performance",
    "test": "Adding missing tests or correcting existing tests",
    "build": "Changes that affect the build system or external dependencies",
    "ci": "Changes to CI configuration files and scripts",
    "chore": "Other changes that don't modify src or test files",
    "revert": "Reverts a previous commit",
}

DEFAULT_CHANGELOG_TYPES: dict[str, str] = {
    "feat": "Features",
    "fix": "Bug Fixes",
    "perf": "Performance",
    "refactor": "Refactoring",
    "docs": "Documentation",
}

DEFAULT_TEMPLATE = "{scope}: {description} ({shortHash})"


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


def _check_patterns(patterns: list[str]) -> list[str]:
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"invalid ignore pattern {pattern!r}: {e}") from e
    return patterns


class TypesConfig(_Section):
    """Allowed commit types, mapping type key to a human-readable description."""

    description: str | None = None
    values: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COMMIT_TYPES))


class ScopeKind(StrEnum):
    """How the scope is entered: free text or one of a fixed list."""

    TEXT = "text"
    LIST = "list"


class ScopeConfig(_Section):
    description: str | None = None
    required: bool = False
    kind: ScopeKind = ScopeKind.TEXT
    values: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _list_needs_values(self) -> ScopeConfig:
        if self.kind is ScopeKind.LIST and not self.values:
            raise ValueError("scope values are required when scope kind is 'list'")
        return self


class ShortDescriptionConfig(_Section):
    description: str | None = None
    min_length: int = Field(default=1, ge=0)
    max_length: int = Field(default=72, gt=0)


class LongDescriptionConfig(_Section):
    enabled: bool = False
    description: str | None = None
    required: bool = False
    min_length: int = Field(default=0, ge=0)
    max_length: int = Field(default=100, gt=0)


class BreakingChangesConfig(_Section):
    enabled: bool = False
    description: str | None = None


class ChangelogFormatConfig(_Section):
    """Entry templates per changelog section.

    Any unset template falls back to ``default_template``.
    """

    section_template: str | None = None
    breaking_changes_template: str | None = None
    other_types_template: str | None = None
    default_template: str | None = DEFAULT_TEMPLATE


class ChangelogConfig(_Section):
    title: str = "Changelog"
    types: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CHANGELOG_TYPES))
    show_other_types: bool = True
    show_breaking_changes: bool = False
    ignored: list[str] = Field(default_factory=list)
    path: Path = Path("CHANGELOG.md")
    format: ChangelogFormatConfig = Field(default_factory=ChangelogFormatConfig)

    @field_validator("ignored")
    @classmethod
    def check_ignored(cls, value: list[str]) -> list[str]:
        return _check_patterns(value)


class LintConfig(_Section):
    ignored: list[str] = Field(default_factory=list)

    @field_validator("ignored")
    @classmethod
    def check_ignored(cls, value: list[str]) -> list[str]:
        return _check_patterns(value)


class CommitScribeConfig(_Section):
    """Root configuration."""

    types: TypesConfig = Field(default_factory=TypesConfig)
    scope: ScopeConfig = Field(default_factory=ScopeConfig)
    short_description: ShortDescriptionConfig = Field(default_factory=ShortDescriptionConfig)
    long_description: LongDescriptionConfig = Field(default_factory=LongDescriptionConfig)
    breaking_changes: BreakingChangesConfig = Field(default_factory=BreakingChangesConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    lint: LintConfig = Field(default_factory=LintConfig)
