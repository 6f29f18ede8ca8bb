"""Small text helpers: substring search, quote-aware search and word splitting."""

from __future__ import annotations

import re

_BLANKS = re.compile(r"[ \t]+")


def _check_needle(needle: str) -> None:
    if not needle:
        raise ValueError("search needle must not be empty")


def find(text: str, needle: str, limit: int) -> int:
    """Return the position of ``needle`` in ``text``, or -1.

    When the needle is longer than ``limit`` the search is not attempted
    and -1 is returned.
    """
    _check_needle(needle)
    if len(needle) > limit:
        return -1
    return text.find(needle)


def find_unquoted(text: str, needle: str, limit: int) -> int:
    """Like :func:`find`, but skip matches that lie inside double quotes.

    Each double-quote character toggles the quoted state before the
    comparison at its position is made.
    """
    _check_needle(needle)
    if len(needle) > limit:
        return -1
    quoted = False
    last_start = len(text) - len(needle)
    for pos, char in enumerate(text):
        if pos > last_start:
            break
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs only."""
    return [word for word in _BLANKS.split(text) if word]