"""Changelog generation from conventional commits.

Commits are parsed, grouped by type and classified into three buckets:
breaking changes, the configured type sections, and everything else.
Each entry is formatted through a configurable template, and the result
is a :class:`ChangelogDocument` ready for rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from commit_scribe.core.emoji import to_alias
from commit_scribe.core.message import CommitMessage
from commit_scribe.core.render import MarkdownRenderer
from commit_scribe.core.version import BumpType, resolve_subtitle
from commit_scribe.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from commit_scribe.config.models import (
        ChangelogConfig,
        ChangelogFormatConfig,
        CommitScribeConfig,
    )
    from commit_scribe.core.render import Renderer
    from commit_scribe.vcs.git import Commit
    from commit_scribe.vcs.resolver import RepositoryReader, RevisionResolver

logger = logging.getLogger(__name__)


class ChangelogScope(Enum):
    """Changelog bucket an entry is rendered for."""

    SECTION = "section"
    BREAKING_CHANGES = "breaking_changes"
    OTHER_TYPES = "other_types"


@dataclass(frozen=True)
class ChangelogDocument:
    """Format-agnostic changelog content.

    ``sections`` holds ``(title, entries)`` pairs in the configured order
    of the commit types.
    """

    title: str | None
    subtitle: str | None
    breaking_changes: tuple[str, ...] = ()
    sections: tuple[tuple[str, tuple[str, ...]], ...] = ()
    other_changes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChangelogOptions:
    """What to include in a changelog and how to label it."""

    rev_spec: str | None = None
    subtitle: str | None = None
    no_subtitle: bool = False
    last_tag: bool = False
    for_tag: str | None = None
    bump: BumpType = BumpType.NONE
    append: bool = False


def resolve_template(format_config: ChangelogFormatConfig, scope: ChangelogScope) -> str:
    """Get the entry template for a changelog bucket.

    Raises:
        ConfigurationError: If neither the bucket template nor the default is set
    """
    templates = {
        ChangelogScope.SECTION: format_config.section_template,
        ChangelogScope.BREAKING_CHANGES: format_config.breaking_changes_template,
        ChangelogScope.OTHER_TYPES: format_config.other_types_template,
    }
    template = templates[scope]
    if template and template.strip():
        return template

    default = format_config.default_template
    if default and default.strip():
        return default
    raise ConfigurationError(f"No template defined for changelog {scope.value} entries")


def resolve_types(config: ChangelogConfig) -> dict[str, str]:
    """Get the changelog section titles keyed by alias-normalized type.

    Raises:
        ConfigurationError: If no changelog types are configured
    """
    types: dict[str, str] = {}
    for key, title in config.types.items():
        types.setdefault(to_alias(key), title)

    if not types:
        raise ConfigurationError("Changelog types are required (changelog.types is empty)")
    return types


def parse_commits(commits: Iterable[Commit]) -> list[CommitMessage]:
    return [CommitMessage.from_commit(commit) for commit in commits]


def group_commits_by_type(messages: Iterable[CommitMessage]) -> dict[str, list[CommitMessage]]:
    """Group messages by alias-normalized type, in order of first appearance.

    Messages without a type cannot be classified; each one is dropped with
    a warning.
    """
    grouped: dict[str, list[CommitMessage]] = {}
    for message in messages:
        if not message.type or not message.type.strip():
            logger.warning(
                "Skipping commit %s: message has no conventional type",
                message.short_hash or "<unknown>",
            )
            continue
        grouped.setdefault(to_alias(message.type.strip()), []).append(message)
    return grouped


def generate_changelog(
    grouped: Mapping[str, list[CommitMessage]],
    config: ChangelogConfig,
    subtitle: str | None = None,
) -> ChangelogDocument | None:
    """Classify grouped messages into a changelog document.

    Args:
        grouped: Messages grouped by type (not modified)
        config: Changelog configuration
        subtitle: Optional subtitle, usually a version

    Returns:
        The document, or None if there is nothing to report
    """
    if not grouped:
        return None

    types = resolve_types(config)
    remaining = {key: list(messages) for key, messages in grouped.items()}

    breaking_changes: list[str] = []
    if config.show_breaking_changes:
        for key, messages in remaining.items():
            breaking = [m for m in messages if m.breaking_changes]
            if not breaking:
                continue
            remaining[key] = [m for m in messages if not m.breaking_changes]
            template = resolve_template(config.format, ChangelogScope.BREAKING_CHANGES)
            breaking_changes.extend(m.format_for_changelog(template) for m in breaking)

    sections: list[tuple[str, tuple[str, ...]]] = []
    for type_key, title in types.items():
        if type_key not in remaining:
            continue
        messages = remaining.pop(type_key)
        if messages:
            template = resolve_template(config.format, ChangelogScope.SECTION)
            sections.append((title, tuple(m.format_for_changelog(template) for m in messages)))

    other_changes: list[str] = []
    leftovers = [m for messages in remaining.values() for m in messages]
    if config.show_other_types and leftovers:
        template = resolve_template(config.format, ChangelogScope.OTHER_TYPES)
        other_changes.extend(m.format_for_changelog(template) for m in leftovers)

    return ChangelogDocument(
        title=config.title,
        subtitle=subtitle,
        breaking_changes=tuple(breaking_changes),
        sections=tuple(sections),
        other_changes=tuple(other_changes),
    )


def select_commits(
    resolver: RevisionResolver,
    repository: RepositoryReader,
    options: ChangelogOptions,
    ignored: list[str] | None = None,
) -> list[Commit]:
    """Pick the commits a changelog covers.

    ``last_tag`` or a bump selects everything since the latest tag (the
    whole history when there is none); ``for_tag`` selects the commits
    between the previous tag and that tag; otherwise ``rev_spec`` is
    resolved as given.
    """
    if options.last_tag or options.bump != BumpType.NONE:
        latest = repository.latest_tag()
        if latest is None:
            logger.debug("No tags found, using the whole history")
            return resolver.resolve_history(ignored=ignored)
        return resolver.resolve(f"{latest}..", ignored)

    if options.for_tag:
        previous = repository.previous_tag(options.for_tag)
        if not previous:
            logger.warning(
                "No tag found before %s, using its parent commit as the start",
                options.for_tag,
            )
            previous = f"{options.for_tag}^"
        return resolver.resolve(f"{previous}..{options.for_tag}", ignored)

    return resolver.resolve(options.rev_spec, ignored)


def build_changelog(
    resolver: RevisionResolver,
    config: CommitScribeConfig,
    options: ChangelogOptions,
    renderer: Renderer | None = None,
) -> str | None:
    """Run the full changelog pipeline.

    Args:
        resolver: Revision resolver bound to the repository
        config: Configuration
        options: Changelog options
        renderer: Output renderer (Markdown by default)

    Returns:
        Rendered changelog, or None if no commit could be classified
    """
    repository = resolver.repository
    commits = select_commits(resolver, repository, options, config.changelog.ignored)
    logger.debug("Resolved %d commits", len(commits))

    grouped = group_commits_by_type(parse_commits(commits))
    subtitle = resolve_subtitle(repository, options)
    logger.debug("Resolved subtitle: %s", subtitle)

    document = generate_changelog(grouped, config.changelog, subtitle)
    if document is None:
        return None

    return (renderer or MarkdownRenderer()).render(document, append=options.append)
