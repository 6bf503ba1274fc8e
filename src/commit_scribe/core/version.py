"""Semantic version parsing, bumping and changelog subtitle resolution."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commit_scribe.core.changelog import ChangelogOptions
    from commit_scribe.vcs.resolver import RepositoryReader

logger = logging.getLogger(__name__)

SEMVER_PATTERN = re.compile(
    r"^(?P<prefix>v?)"
    r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<pre_release>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)

# Subtitle used for the first release when the repository has no tag yet
INITIAL_VERSIONS = {
    "major": "v1.0.0",
    "minor": "v0.1.0",
    "patch": "v0.0.1",
}


class BumpType(StrEnum):
    """Kind of version bump."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


@dataclass(frozen=True)
class SemVer:
    """Immutable semantic version, optionally prefixed with ``v``."""

    prefix: str
    major: int
    minor: int
    patch: int
    pre_release: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, text: str | None) -> SemVer | None:
        """Parse a version string, returning None if it is not a version."""
        if not text:
            return None
        match = SEMVER_PATTERN.match(text.strip())
        if match is None:
            return None
        return cls(
            prefix=match.group("prefix"),
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            pre_release=match.group("pre_release"),
            build=match.group("build"),
        )

    def bump_major(self) -> SemVer:
        return replace(
            self, major=self.major + 1, minor=0, patch=0, pre_release=None, build=None
        )

    def bump_minor(self) -> SemVer:
        return replace(self, minor=self.minor + 1, patch=0, pre_release=None, build=None)

    def bump_patch(self) -> SemVer:
        return replace(self, patch=self.patch + 1, pre_release=None, build=None)

    def bump(self, bump_type: BumpType) -> SemVer:
        """Apply a bump; BumpType.NONE returns the version unchanged."""
        if bump_type == BumpType.MAJOR:
            return self.bump_major()
        if bump_type == BumpType.MINOR:
            return self.bump_minor()
        if bump_type == BumpType.PATCH:
            return self.bump_patch()
        return self

    def __str__(self) -> str:
        version = f"{self.prefix}{self.major}.{self.minor}.{self.patch}"
        if self.pre_release is not None:
            version += f"-{self.pre_release}"
        if self.build is not None:
            version += f"+{self.build}"
        return version


def select_bump(*, major: bool = False, minor: bool = False, patch: bool = False) -> BumpType:
    """Pick a single bump from flags, with priority major > minor > patch."""
    if major:
        return BumpType.MAJOR
    if minor:
        return BumpType.MINOR
    if patch:
        return BumpType.PATCH
    return BumpType.NONE


def bump_version(version: str, bump_type: BumpType) -> str:
    """Bump a version string.

    Strings that are not semantic versions are returned unchanged with a
    warning; the bump is never silently dropped.
    """
    if bump_type == BumpType.NONE:
        return version

    semver = SemVer.parse(version)
    if semver is None:
        logger.warning("'%s' is not a semantic version, skipping %s bump", version, bump_type)
        return version
    return str(semver.bump(bump_type))


def resolve_subtitle(repository: RepositoryReader, options: ChangelogOptions) -> str | None:
    """Resolve the changelog subtitle.

    An explicit subtitle wins. Otherwise the base version is the ``for_tag``
    override or, failing that, the latest tag, and the requested bump is
    applied to it. Without any tag a fixed initial version is used when a
    bump was requested.

    Args:
        repository: Repository used to look up the latest tag
        options: Changelog generation options

    Returns:
        Subtitle text, or None when there is nothing to show
    """
    if options.no_subtitle:
        return None
    if options.subtitle and options.subtitle.strip():
        return options.subtitle

    version = options.for_tag if options.for_tag else repository.latest_tag()

    if version is None:
        if options.bump == BumpType.NONE:
            return None
        return INITIAL_VERSIONS[options.bump.value]

    return bump_version(version, options.bump)
