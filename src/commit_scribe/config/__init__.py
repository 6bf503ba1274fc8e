"""Configuration management for commit-scribe."""

from __future__ import annotations

from commit_scribe.config.loader import load_config
from commit_scribe.config.models import (
    BreakingChangesConfig,
    ChangelogConfig,
    ChangelogFormatConfig,
    CommitScribeConfig,
    LintConfig,
    LongDescriptionConfig,
    ScopeConfig,
    ScopeKind,
    ShortDescriptionConfig,
    TypesConfig,
)

__all__ = [
    "BreakingChangesConfig",
    "ChangelogConfig",
    "ChangelogFormatConfig",
    "CommitScribeConfig",
    "LintConfig",
    "LongDescriptionConfig",
    "ScopeConfig",
    "ScopeKind",
    "ShortDescriptionConfig",
    "TypesConfig",
    "load_config",
]
