"""
Indexer module for mechanic-mcp.

Turns docs and task records into an immutable in-memory index and answers
ranked, filterable, typo-tolerant keyword queries against it.
"""

from mechanic_mcp.indexer.builder import build_index
from mechanic_mcp.indexer.fuzzy import expand_token, levenshtein
from mechanic_mcp.indexer.models import (
    BuiltIndex,
    DocRecord,
    IndexedDocument,
    Record,
    SearchHit,
    SearchOptions,
    SearchResponse,
    Snapshot,
    TaskRecord,
)
from mechanic_mcp.indexer.search import search
from mechanic_mcp.indexer.tokenizer import tokenize
from mechanic_mcp.indexer.walker import load_docs, load_tasks

__all__ = [
    "BuiltIndex",
    "DocRecord",
    "IndexedDocument",
    "Record",
    "SearchHit",
    "SearchOptions",
    "SearchResponse",
    "Snapshot",
    "TaskRecord",
    "build_index",
    "expand_token",
    "levenshtein",
    "load_docs",
    "load_tasks",
    "search",
    "tokenize",
]
