"""
Whitespace and case normalization for hearing list text.

normalize() is for comparisons only (headers, keywords). Values that end
up in a CaseRecord go through clean_text(), which keeps the casing.
"""

import re

_WHITESPACE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Collapse whitespace runs, trim and lower-case.

    Args:
        text: Raw text (None is treated as empty).

    Returns:
        Normalized comparison text.
    """
    return clean_text(text).lower()


def clean_text(text: str | None) -> str:
    """Collapse whitespace runs and trim, preserving case."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def strip_pipes(text: str | None) -> str:
    """Remove the " | " joins left by multi-paragraph cells."""
    return clean_text((text or "").replace("|", " "))


def dedupe_words(text: str) -> str:
    """Drop repeated words, keeping each word's first occurrence.

    Court lines are often rendered twice ("Leeds Leeds County Court").
    """
    seen: set[str] = set()
    words = []
    for word in clean_text(text).split(" "):
        if word not in seen:
            seen.add(word)
            words.append(word)
    return " ".join(words)
