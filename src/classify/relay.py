"""Keyword scan for messages that may relay the principal's instructions."""

from __future__ import annotations

from src.config import settings

_keywords: tuple[str, ...] | None = None


def _get_keywords() -> tuple[str, ...]:
    """Lazily load and cache the casefolded keyword list."""
    global _keywords  # noqa: PLW0603
    if _keywords is None:
        _keywords = tuple(k.casefold() for k in settings.get_relay_keywords() if k.strip())
    return _keywords


def contains_relay_trigger(text: str, keywords: tuple[str, ...] | None = None) -> bool:
    """Return True if *text* contains any relay keyword.

    Deliberately broad: generic verbs like "prepare" trigger too, and the
    task extractor sorts out false positives.
    """
    if keywords is None:
        keywords = _get_keywords()
    else:
        keywords = tuple(k.casefold() for k in keywords if k.strip())
    haystack = text.casefold()
    return any(keyword in haystack for keyword in keywords)
