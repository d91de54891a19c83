"""Weighted multi-field TF-IDF scoring."""

import math
from collections.abc import Sequence

from mechanic_mcp.indexer.fields import field_weight
from mechanic_mcp.indexer.fuzzy import TokenCandidates
from mechanic_mcp.indexer.models import BuiltIndex, IndexedDocument


def inverse_document_frequency(index: BuiltIndex, token: str) -> float:
    """``ln(1 + N / (1 + df))``; unseen tokens get the largest value."""
    return math.log(1 + index.total_documents / (1 + index.doc_freq.get(token, 0)))


def score_document(
    doc: IndexedDocument,
    token_candidates: Sequence[TokenCandidates],
    index: BuiltIndex,
) -> float:
    """
    Sum ``tf * field_weight * idf * candidate_weight`` over all query
    tokens, their candidates and the fields containing each candidate.

    Query tokens combine with OR semantics: matching any one of them is
    enough for a positive score.
    """
    score = 0.0
    for expanded in token_candidates:
        for candidate in expanded.candidates:
            idf = inverse_document_frequency(index, candidate.token)
            for field_name, freq_map in doc.token_freq.items():
                freq = freq_map.get(candidate.token, 0)
                if freq == 0:
                    continue
                score += freq * field_weight(field_name) * idf * candidate.weight
    return score
