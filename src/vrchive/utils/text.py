"""Text helpers."""

from __future__ import annotations


def contains_ignore_case(text: str, needle: str) -> bool:
    """Return True when ``needle`` occurs in ``text``, ignoring case."""
    return needle.lower() in text.lower()
