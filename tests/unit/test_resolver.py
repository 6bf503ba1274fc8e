"""Tests for revision specifier resolution."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from commit_scribe.exceptions import RevisionNotFoundError, UnsupportedObjectTypeError
from commit_scribe.vcs.git import Commit, ObjectInfo, ObjectKind
from commit_scribe.vcs.resolver import RevisionResolver, filter_ignored

FIRST = "1" * 40
SECOND = "2" * 40
THIRD = "3" * 40
TAG_OBJECT = "7" * 40
TREE = "9" * 40


def make_commit(sha: str, message: str) -> Commit:
    date = datetime(2024, 1, 15, tzinfo=timezone.utc)
    return Commit(sha, message, "Test User", "test@example.com", date)


COMMITS = {
    FIRST: make_commit(FIRST, "feat: add parser"),
    SECOND: make_commit(SECOND, "chore: tidy up"),
    THIRD: make_commit(THIRD, "🔥 remove dead code"),
}
HISTORY = [THIRD, SECOND, FIRST]


@pytest.fixture
def repository() -> MagicMock:
    """Repository mock with three commits, an annotated tag and a tree.

    ``v1.0.0`` is an annotated tag on the first commit; ``light`` is a
    lightweight tag on the same commit.
    """
    refs = {
        "HEAD": THIRD,
        "main": THIRD,
        "v1.0.0": TAG_OBJECT,
        "light": FIRST,
        "second": SECOND,
        "HEAD^{tree}": TREE,
    }
    infos = {
        FIRST: ObjectInfo(ObjectKind.COMMIT, FIRST, FIRST, "commit"),
        SECOND: ObjectInfo(ObjectKind.COMMIT, SECOND, SECOND, "commit"),
        THIRD: ObjectInfo(ObjectKind.COMMIT, THIRD, THIRD, "commit"),
        TAG_OBJECT: ObjectInfo(ObjectKind.TAG, TAG_OBJECT, FIRST, "tag"),
        TREE: ObjectInfo(ObjectKind.OTHER, TREE, None, "tree"),
    }

    def commits_between(start_id: str | None, end_id: str) -> list[Commit]:
        history = HISTORY[HISTORY.index(end_id) :]
        if start_id is not None:
            history = history[: history.index(start_id)]
        return [COMMITS[sha] for sha in history]

    repo = MagicMock()
    repo.resolve.side_effect = refs.get
    repo.classify.side_effect = infos.__getitem__
    repo.get_commit.side_effect = COMMITS.__getitem__
    repo.commits_between.side_effect = commits_between
    return repo


@pytest.fixture
def resolver(repository: MagicMock) -> RevisionResolver:
    return RevisionResolver(repository)


class TestResolveSingle:
    """Tests for single revisions."""

    @pytest.mark.parametrize("rev_spec", [None, "", "   "])
    def test_blank_is_head(self, resolver: RevisionResolver, rev_spec: str | None):
        """A blank specifier resolves to HEAD."""
        assert resolver.resolve(rev_spec) == [COMMITS[THIRD]]

    def test_single_commit(self, resolver: RevisionResolver):
        """A single ref resolves to exactly one commit."""
        assert resolver.resolve("second") == [COMMITS[SECOND]]

    def test_annotated_tag_dereferenced(self, resolver: RevisionResolver):
        """An annotated tag resolves to its commit."""
        assert resolver.resolve("v1.0.0") == [COMMITS[FIRST]]

    def test_unknown_revision(self, resolver: RevisionResolver):
        """An unresolvable specifier raises RevisionNotFoundError."""
        with pytest.raises(RevisionNotFoundError) as exc_info:
            resolver.resolve("does-not-exist")

        assert exc_info.value.rev_spec == "does-not-exist"

    def test_unsupported_object(self, resolver: RevisionResolver):
        """A tree is neither a commit nor a tag."""
        with pytest.raises(UnsupportedObjectTypeError, match="tree"):
            resolver.resolve("HEAD^{tree}")


class TestResolveRange:
    """Tests for start..end ranges."""

    def test_range_includes_start_commit(self, resolver: RevisionResolver):
        """A commit or lightweight tag start includes its own commit."""
        commits = resolver.resolve("light..main")

        assert commits == [COMMITS[THIRD], COMMITS[SECOND], COMMITS[FIRST]]

    def test_range_excludes_annotated_tag_start(self, resolver: RevisionResolver):
        """An annotated tag start excludes its commit."""
        assert resolver.resolve("v1.0.0..main") == [COMMITS[THIRD], COMMITS[SECOND]]

    def test_blank_end_is_head(self, resolver: RevisionResolver):
        """A missing end defaults to HEAD."""
        assert resolver.resolve("v1.0.0..") == resolver.resolve("v1.0.0..HEAD")

    def test_blank_start_raises(self, resolver: RevisionResolver):
        """A missing start is an unresolvable specifier."""
        with pytest.raises(RevisionNotFoundError):
            resolver.resolve("..HEAD")

    def test_unknown_end_raises(self, resolver: RevisionResolver):
        """An unresolvable end raises RevisionNotFoundError."""
        with pytest.raises(RevisionNotFoundError):
            resolver.resolve("second..nowhere")

    def test_range_with_ignored(self, resolver: RevisionResolver):
        """Ignore patterns are applied to the resolved range."""
        assert resolver.resolve("light..main", ["^chore"]) == [COMMITS[THIRD], COMMITS[FIRST]]


class TestResolveHistory:
    """Tests for resolve_history and is_tag."""

    def test_whole_history(self, resolver: RevisionResolver):
        """Every commit reachable from HEAD is listed, newest first."""
        assert resolver.resolve_history() == [COMMITS[sha] for sha in HISTORY]

    def test_history_with_ignored(self, resolver: RevisionResolver):
        """Ignore patterns apply to the history too."""
        assert resolver.resolve_history(ignored=["^feat"]) == [COMMITS[THIRD], COMMITS[SECOND]]

    def test_is_tag(self, resolver: RevisionResolver):
        """Only annotated tags count as tags."""
        assert resolver.is_tag("v1.0.0") is True
        assert resolver.is_tag("light") is False
        assert resolver.is_tag("does-not-exist") is False


class TestFilterIgnored:
    """Tests for ignore pattern filtering."""

    def test_no_patterns(self):
        """Without patterns every commit is kept."""
        commits = list(COMMITS.values())

        assert filter_ignored(commits, None) == commits
        assert filter_ignored(commits, []) == commits

    def test_patterns_combined(self):
        """A commit matching any pattern is dropped."""
        kept = filter_ignored(list(COMMITS.values()), ["^chore", "parser$"])

        assert kept == [COMMITS[THIRD]]

    def test_glyph_message_matched_by_alias(self):
        """Messages are matched in alias form."""
        kept = filter_ignored(list(COMMITS.values()), ["^:fire:"])

        assert COMMITS[THIRD] not in kept
        assert len(kept) == 2

    def test_glyph_pattern_not_normalized(self):
        """Patterns written with glyphs do not match normalized messages."""
        kept = filter_ignored(list(COMMITS.values()), ["^🔥"])

        assert len(kept) == 3
