"""Command-line interface for commit-scribe."""
