"""commit-scribe: Conventional Commit tooling for git repositories.

Parses and validates commit messages, resolves revision ranges and
assembles Markdown changelogs from git history.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
