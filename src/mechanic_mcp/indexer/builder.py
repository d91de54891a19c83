"""Builds the frozen in-memory index from a collection of records."""

import logging
from collections.abc import Iterable

from mechanic_mcp.indexer.fields import extract_fields
from mechanic_mcp.indexer.models import BuiltIndex, IndexedDocument, Record
from mechanic_mcp.indexer.tokenizer import count_tokens

logger = logging.getLogger(__name__)


def index_record(record: Record) -> IndexedDocument:
    """Extract and tokenize every field of a single record."""
    field_text = extract_fields(record)
    token_freq = {name: count_tokens(text) for name, text in field_text.items()}
    return IndexedDocument(
        id=record.id,
        kind=record.kind,
        path=record.path,
        tags=tuple(record.tags or ()),
        field_text=field_text,
        token_freq=token_freq,
        raw=record,
    )


def compute_doc_freq(documents: Iterable[IndexedDocument]) -> dict[str, int]:
    """
    Count, per token, the documents containing it in any field.

    A token is counted once per document no matter how many fields or
    occurrences it has there.
    """
    doc_freq: dict[str, int] = {}
    for doc in documents:
        seen: set[str] = set()
        for field_tokens in doc.token_freq.values():
            seen.update(field_tokens)
        for token in seen:
            doc_freq[token] = doc_freq.get(token, 0) + 1
    return doc_freq


def build_index(records: Iterable[Record]) -> BuiltIndex:
    """
    Build a complete index over records.

    The result is a new immutable value; callers publish it by swapping a
    single reference, so a partially built index is never visible.
    """
    documents = tuple(index_record(record) for record in records)
    doc_freq = compute_doc_freq(documents)
    logger.debug(
        "Built index: %d documents, %d distinct tokens", len(documents), len(doc_freq)
    )
    return BuiltIndex(
        documents=documents,
        doc_freq=doc_freq,
        total_documents=len(documents),
    )
