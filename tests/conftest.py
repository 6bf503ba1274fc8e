"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import pytest
from git import Actor, Repo

from commit_scribe.config.models import CommitScribeConfig
from commit_scribe.vcs.git import Commit

BASE_TIMESTAMP = 1_700_000_000
TEST_ACTOR = Actor("Test User", "test@example.com")


def make_commit(sha: str, message: str, author_name: str = "Test User") -> Commit:
    """Build an in-memory commit."""
    return Commit(
        sha=sha,
        message=message,
        author_name=author_name,
        author_email="test@example.com",
        date=datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def feat_commit() -> Commit:
    """A feature commit."""
    return make_commit("a" * 40, "feat: add new feature")


@pytest.fixture
def fix_commit() -> Commit:
    """A fix commit with scope."""
    return make_commit("b" * 40, "fix(parser): handle empty input")


@pytest.fixture
def breaking_commit() -> Commit:
    """A breaking change commit."""
    return make_commit("c" * 40, "feat(api)!: change response format")


@pytest.fixture
def sample_commits(feat_commit: Commit, fix_commit: Commit, breaking_commit: Commit) -> list[Commit]:
    """A mix of conventional and non-conventional commits."""
    return [
        feat_commit,
        fix_commit,
        breaking_commit,
        make_commit("d" * 40, "docs: update README"),
        make_commit("e" * 40, "chore: bump dependencies"),
        make_commit("f" * 40, "Update something without type"),
    ]


@pytest.fixture
def default_config() -> CommitScribeConfig:
    """Configuration with every default."""
    return CommitScribeConfig()


# =============================================================================
# Real repositories
# =============================================================================


@dataclass
class GitHistory:
    """A throwaway repository and the commits it was built from."""

    repo: Repo
    path: Path
    shas: dict[str, str] = field(default_factory=dict)


def commit_file(repo: Repo, message: str, offset: int) -> str:
    """Append to a file and commit it at BASE_TIMESTAMP + offset seconds."""
    path = Path(repo.working_tree_dir) / "history.txt"
    with path.open("a", encoding="utf-8") as f:
        f.write(f"{message}\n")
    repo.index.add(["history.txt"])

    date = f"{BASE_TIMESTAMP + offset} +0000"
    commit = repo.index.commit(
        message,
        author=TEST_ACTOR,
        committer=TEST_ACTOR,
        author_date=date,
        commit_date=date,
    )
    return commit.hexsha


def init_repo(path: Path) -> Repo:
    repo = Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", TEST_ACTOR.name)
        writer.set_value("user", "email", TEST_ACTOR.email)
    return repo


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> GitHistory:
    """A repository with a single commit and no tags."""
    repo = init_repo(tmp_path)
    sha = commit_file(repo, "feat: initial commit", 0)
    return GitHistory(repo=repo, path=tmp_path, shas={"initial": sha})


@pytest.fixture
def git_history(tmp_path: Path) -> GitHistory:
    """A repository with five commits and two tags.

    History, oldest first::

        first   feat: add parser            <- v0.1.0 (lightweight)
        second  fix(core): handle empty input
        third   chore: tidy up              <- v0.2.0 (annotated)
        fourth  feat(api)!: drop endpoint
        fifth   docs: update readme         <- HEAD
    """
    repo = init_repo(tmp_path)
    shas = {
        "first": commit_file(repo, "feat: add parser", 0),
        "second": commit_file(repo, "fix(core): handle empty input", 100),
        "third": commit_file(repo, "chore: tidy up", 200),
    }
    repo.create_tag("v0.1.0", ref=shas["first"])
    repo.create_tag("v0.2.0", ref=shas["third"], message="Release 0.2.0")
    shas["fourth"] = commit_file(repo, "feat(api)!: drop endpoint", 300)
    shas["fifth"] = commit_file(repo, "docs: update readme", 400)
    return GitHistory(repo=repo, path=tmp_path, shas=shas)
