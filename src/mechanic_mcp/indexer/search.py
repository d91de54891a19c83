"""Query execution: filtering, scoring, ranking, pagination and snippets."""

import logging

from mechanic_mcp.indexer.fuzzy import build_token_candidates
from mechanic_mcp.indexer.models import (
    BuiltIndex,
    IndexedDocument,
    SearchHit,
    SearchOptions,
    SearchResponse,
    TaskRecord,
)
from mechanic_mcp.indexer.scorer import score_document
from mechanic_mcp.indexer.snippet import record_snippet
from mechanic_mcp.indexer.tokenizer import tokenize

logger = logging.getLogger(__name__)


def matches_tags(doc: IndexedDocument, tags: list[str] | None) -> bool:
    """True if the document carries every requested tag (case-insensitive)."""
    if not tags:
        return True
    doc_tags = {tag.lower() for tag in doc.tags}
    return all(tag.lower() in doc_tags for tag in tags)


def matches_subscriptions(doc: IndexedDocument, subscriptions: list[str] | None) -> bool:
    """
    True if every requested substring occurs in the task's subscriptions
    or subscriptions template (case-insensitive).

    Docs have no subscriptions and pass through untouched.
    """
    if not subscriptions or not isinstance(doc.raw, TaskRecord):
        return True
    task = doc.raw
    combined = " ".join(
        [" ".join(event.lower() for event in task.events), (task.subscriptions_template or "").lower()]
    )
    return all(sub.lower() in combined for sub in subscriptions)


def search(index: BuiltIndex, options: SearchOptions) -> SearchResponse:
    """
    Run a query against a built index.

    Kind, tag and subscription filters are hard predicates applied before
    scoring. Documents scoring zero are dropped unless the query has no
    tokens at all, in which case every remaining document is returned with
    score 0. Results are ordered by score descending, then by id.

    Raises:
        ValueError: If options are out of range.
    """
    options.validate()

    tokens = tokenize(options.query)
    token_candidates = build_token_candidates(
        tokens,
        index.doc_freq,
        options.fuzzy,
        options.fuzzy_max_edits,
        options.fuzzy_max_candidates,
    )
    snippet_tokens = [c.token for expanded in token_candidates for c in expanded.candidates]
    logger.debug("Query %r expanded to %s", options.query, snippet_tokens)

    scored: list[tuple[float, IndexedDocument]] = []
    for doc in index.documents:
        if options.kind and doc.kind != options.kind:
            continue
        if not matches_tags(doc, options.tags):
            continue
        if not matches_subscriptions(doc, options.subscriptions):
            continue

        score = score_document(doc, token_candidates, index)
        if token_candidates and score == 0:
            continue
        scored.append((score, doc))

    scored.sort(key=lambda item: (-item[0], item[1].id))

    end = options.offset + options.limit
    page = scored[options.offset : end]
    next_offset = end if len(scored) > end else None

    items = [
        SearchHit(
            id=doc.id,
            kind=doc.kind,
            title=doc.raw.title,
            path=doc.path,
            snippet=record_snippet(doc.raw, snippet_tokens),
            tags=list(doc.tags),
            score=score,
        )
        for score, doc in page
    ]
    return SearchResponse(items=items, next_offset=next_offset)
