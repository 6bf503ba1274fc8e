"""Commit message validation against configured rules.

Rules are evaluated in a fixed order and independently of each other, so
a single pass reports every problem with a message at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from commit_scribe.core.emoji import to_alias
from commit_scribe.exceptions import CommitValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from commit_scribe.config.models import CommitScribeConfig
    from commit_scribe.core.message import CommitMessage

logger = logging.getLogger(__name__)

TYPE_LABEL = "Type"
SCOPE_LABEL = "Scope"
SHORT_DESCRIPTION_LABEL = "Short description"
LONG_DESCRIPTION_LABEL = "Long description"


@dataclass(frozen=True)
class Violation:
    """A single broken rule."""

    scope: str
    message: str

    def __str__(self) -> str:
        return f"{self.scope}: {self.message}"


def collect_violations(message: CommitMessage, config: CommitScribeConfig) -> list[Violation]:
    """Check a message against every rule and collect the violations.

    Args:
        message: Parsed commit message
        config: Rule configuration

    Returns:
        Violations in rule order (empty if the message is valid)
    """
    violations: list[Violation] = []

    def ensure(condition: bool, scope: str, text: str) -> None:
        if not condition:
            violations.append(Violation(scope, text))

    # Type
    commit_type = to_alias(message.type.strip()) if message.type else None
    allowed = [to_alias(key) for key in config.types.values]
    ensure(bool(commit_type), TYPE_LABEL, "commit type is required")
    ensure(
        commit_type in allowed,
        TYPE_LABEL,
        f"type '{message.type or ''}' is not allowed (expected one of: {', '.join(allowed)})",
    )

    # Scope
    ensure(
        not (config.scope.required and _is_blank(message.scope)),
        SCOPE_LABEL,
        "scope is required",
    )

    # Short description
    short = message.short_description
    ensure(not _is_blank(short), SHORT_DESCRIPTION_LABEL, "short description is required")
    if short is not None:
        limits = config.short_description
        ensure(
            len(short) >= limits.min_length,
            SHORT_DESCRIPTION_LABEL,
            f"must be at least {limits.min_length} characters long",
        )
        ensure(
            len(short) <= limits.max_length,
            SHORT_DESCRIPTION_LABEL,
            f"must be at most {limits.max_length} characters long",
        )

    # Long description
    limits_long = config.long_description
    if limits_long.required:
        body = message.long_description
        ensure(not _is_blank(body), LONG_DESCRIPTION_LABEL, "long description is required")
        if body is not None:
            ensure(
                len(body) >= limits_long.min_length,
                LONG_DESCRIPTION_LABEL,
                f"must be at least {limits_long.min_length} characters long",
            )
            ensure(
                len(body) <= limits_long.max_length,
                LONG_DESCRIPTION_LABEL,
                f"must be at most {limits_long.max_length} characters long",
            )

    return violations


def validate(
    message: CommitMessage,
    config: CommitScribeConfig,
    *,
    raise_on_error: bool = False,
) -> list[Violation]:
    """Validate a single message.

    Raises:
        CommitValidationError: If raise_on_error is set and rules are broken
    """
    violations = collect_violations(message, config)
    if violations and raise_on_error:
        raise CommitValidationError(violations)
    return violations


def validate_batch(messages: Mapping[str, CommitMessage], config: CommitScribeConfig) -> None:
    """Validate many messages, reporting all failures together.

    Args:
        messages: Messages keyed by an identifier (usually the commit sha)
        config: Rule configuration

    Raises:
        CommitValidationError: Listing every offending identifier
    """
    failed: dict[str, list[Violation]] = {}
    for key, message in messages.items():
        violations = collect_violations(message, config)
        if violations:
            failed[key] = violations

    logger.debug("Validated %d messages, %d failed", len(messages), len(failed))
    if failed:
        raise CommitValidationError(violations_by_id=failed)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
