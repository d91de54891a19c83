"""Typo-tolerant expansion of query tokens against the index vocabulary."""

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """A vocabulary token standing in for a query token."""

    token: str
    distance: int
    weight: float


@dataclass(frozen=True)
class TokenCandidates:
    """All candidates chosen for one query token."""

    query_token: str
    candidates: tuple[Candidate, ...]


def levenshtein(a: str, b: str) -> int:
    """
    Edit distance between two strings (insert, delete, substitute cost 1).

    Examples:
        >>> levenshtein("refund", "refnud")
        2
        >>> levenshtein("", "tag")
        3
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev_row = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        curr_row = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            curr_row.append(
                min(
                    prev_row[j] + 1,  # deletion
                    curr_row[j - 1] + 1,  # insertion
                    prev_row[j - 1] + cost,  # substitution
                )
            )
        prev_row = curr_row
    return prev_row[-1]


def distance_weight(distance: int) -> float:
    if distance == 0:
        return 1.0
    if distance == 1:
        return 0.6
    return 0.3


def expand_token(
    token: str,
    doc_freq: Mapping[str, int],
    max_edits: int,
    max_candidates: int,
) -> list[Candidate]:
    """
    Find vocabulary tokens within ``max_edits`` of ``token``.

    The literal token is always a candidate, even if it is not in the
    vocabulary. Candidates are ordered by distance, then by descending
    document frequency, then alphabetically, and truncated to
    ``max_candidates``.
    """
    candidates = []
    for vocab_token in doc_freq:
        distance = levenshtein(token, vocab_token)
        if distance <= max_edits:
            candidates.append(Candidate(vocab_token, distance, distance_weight(distance)))

    if not any(c.distance == 0 for c in candidates):
        candidates.append(Candidate(token, 0, 1.0))

    candidates.sort(key=lambda c: (c.distance, -doc_freq.get(c.token, 0), c.token))
    return candidates[:max_candidates]


def build_token_candidates(
    tokens: list[str],
    doc_freq: Mapping[str, int],
    fuzzy: bool,
    max_edits: int,
    max_candidates: int,
) -> list[TokenCandidates]:
    """Expand every query token, or keep it literal when fuzzy is off."""
    result = []
    for token in tokens:
        if fuzzy:
            candidates = expand_token(token, doc_freq, max_edits, max_candidates)
        else:
            candidates = [Candidate(token, 0, 1.0)]
        result.append(TokenCandidates(token, tuple(candidates)))
    return result
