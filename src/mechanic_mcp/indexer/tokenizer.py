"""Tokenizer shared by indexing and query parsing."""

import re

STOP_WORDS = frozenset(
    ["a", "an", "and", "for", "from", "in", "of", "on", "or", "the", "to", "with"]
)

_SEPARATOR_PATTERN = re.compile(r"[_/]+")
_SPLIT_PATTERN = re.compile(r"[^a-z0-9]+")


def tokenize(text: str | None) -> list[str]:
    """
    Split text into normalized tokens.

    Lower-cases, treats ``_`` and ``/`` as spaces, splits on any run of
    characters outside ``[a-z0-9]`` and drops empty tokens and stop words.

    Examples:
        >>> tokenize("Tag the order_created/paid events")
        ['tag', 'order', 'created', 'paid', 'events']
        >>> tokenize("")
        []
    """
    if not text:
        return []
    normalized = _SEPARATOR_PATTERN.sub(" ", text.lower())
    return [
        token
        for token in _SPLIT_PATTERN.split(normalized)
        if token and token not in STOP_WORDS
    ]


def count_tokens(text: str | None) -> dict[str, int]:
    """Count token occurrences in text, preserving first-seen order."""
    counts: dict[str, int] = {}
    for token in tokenize(text):
        counts[token] = counts.get(token, 0) + 1
    return counts
