"""Conversion between emoji glyphs and their ``:alias:`` form.

Commit types may be written either as a glyph (``✨``) or as a GitHub-style
alias (``:sparkles:``). Everything that compares or groups types works on
the alias form.
"""

from __future__ import annotations

import re

import emoji

ALIAS_PATTERN = re.compile(r":(\w+):")
ALIAS_TOKEN_PATTERN = re.compile(r"^:\w+:$")

# Variation selector 16 and zero width joiner left behind a matched glyph
GLYPH_TRAILERS = "\ufe0f\u200d"


def is_alias_token(text: str | None) -> bool:
    """Return True if text is exactly one ``:alias:`` token."""
    return bool(text) and ALIAS_TOKEN_PATTERN.match(text) is not None


def contains_alias(text: str) -> bool:
    return ALIAS_PATTERN.search(text) is not None


def to_alias(text: str) -> str:
    """Replace every emoji glyph in text with its alias.

    Text without glyphs is returned unchanged, so the function is
    idempotent on already-normalized strings.
    """
    if not emoji.emoji_count(text):
        return text
    return emoji.demojize(text, language="alias")


def to_glyph(text: str) -> str:
    """Replace every known ``:alias:`` in text with its emoji glyph."""
    if not contains_alias(text):
        return text
    return emoji.emojize(text, language="alias")


def leading_glyph_to_alias(text: str) -> str:
    """Normalize only a glyph sitting at the very start of text."""
    found = emoji.emoji_list(text)
    if not found or found[0]["match_start"] != 0:
        return text
    end = found[0]["match_end"]
    return to_alias(text[:end]) + text[end:].lstrip(GLYPH_TRAILERS)
