"""MCP tools for mechanic-mcp server.

This module defines the tools exposed by the MCP server:
- search_tasks: Ranked, typo-tolerant search over the task library
- search_docs: The same search over documentation pages
- get_task: Full task payload by id or handle
- get_doc: Full doc content by id or path
- similar_tasks: Tasks sharing tags or subscriptions with a given task
- refresh_index: Pull sources and rebuild the index
"""

import logging

from fastmcp import FastMCP

from mechanic_mcp.indexer import search
from mechanic_mcp.indexer.models import (
    DocRecord,
    ResourceKind,
    SearchOptions,
    Snapshot,
    TaskRecord,
)
from mechanic_mcp.store import DataStore

logger = logging.getLogger(__name__)


def _task_handle(record: TaskRecord) -> str:
    return record.slug or record.id.removeprefix("task:")


def _task_url(store: DataStore, handle: str) -> str:
    base_url = store.config.tasks_base_url if store.config else "https://tasks.mechanic.dev"
    return f"{base_url}/{handle}"


def find_task(snapshot: Snapshot, handle: str) -> TaskRecord | None:
    """Look up a task by id (``task:<handle>``), bare handle or slug."""
    record_id = handle if handle.startswith("task:") else f"task:{handle}"
    record = snapshot.get(record_id)
    if isinstance(record, TaskRecord):
        return record
    for task in snapshot.of_kind("task"):
        if isinstance(task, TaskRecord) and task.slug == handle:
            return task
    return None


def run_search(store: DataStore, kind: ResourceKind, **options) -> dict:
    """Search one kind of record and decorate hits with public URLs."""
    snapshot = store.snapshot
    try:
        response = search(snapshot.index, SearchOptions(kind=kind, **options))
    except ValueError as e:
        return {"items": [], "error": str(e)}

    items = []
    for hit in response.items:
        item = hit.to_dict()
        record = snapshot.get(hit.id)
        if isinstance(record, TaskRecord):
            item["url"] = _task_url(store, _task_handle(record))
            item["subscriptions"] = list(record.events)
            item["subscriptions_template"] = record.subscriptions_template
            item["options"] = record.options
        elif isinstance(record, DocRecord):
            item["url"] = record.source_url or record.path
            item["source_url"] = record.source_url or record.path
        items.append(item)

    result: dict = {"items": items}
    if response.next_offset is not None:
        result["next_offset"] = response.next_offset
    return result


def get_task_detail(store: DataStore, task_id: str) -> dict:
    """Full payload for a task, or an error dict."""
    record = find_task(store.snapshot, task_id)
    if record is None:
        return {"error": f"Task not found or not a task: {task_id}"}

    handle = _task_handle(record)
    return {
        "id": record.id,
        "handle": handle,
        "name": record.title,
        "tags": list(record.tags),
        "url": _task_url(store, handle),
        "subscriptions": list(record.events),
        "subscriptions_template": record.subscriptions_template,
        "options": record.options,
        "script": record.script,
        "online_store_javascript": record.online_store_javascript,
        "order_status_javascript": record.order_status_javascript,
    }


def get_doc_detail(store: DataStore, doc_id: str) -> dict:
    """Full content for a doc, or an error dict."""
    record_id = doc_id if doc_id.startswith("doc:") else f"doc:{doc_id}"
    record = store.get_record(record_id)
    if not isinstance(record, DocRecord):
        return {"error": f"Doc not found or not a doc: {doc_id}"}
    return {
        "id": record.id,
        "title": record.title,
        "path": record.path,
        "url": record.source_url,
        "content": record.content,
    }


def find_similar_tasks(store: DataStore, handle: str, limit: int = 5) -> dict:
    """
    Rank other tasks by overlap with the target task.

    Each shared tag scores 2, each shared subscription 1, and a title
    containing the first word of the target's title adds 0.5.
    """
    if not 1 <= limit <= 20:
        return {"items": [], "error": f"limit must be between 1 and 20, got {limit}"}

    snapshot = store.snapshot
    target = find_task(snapshot, handle)
    if target is None:
        return {"items": [], "error": f"Task not found: {handle}"}

    target_tags = {t.lower() for t in target.tags}
    target_subs = {s.lower() for s in target.events}
    title_words = target.title.lower().split()
    first_word = title_words[0] if title_words else ""

    scored: list[tuple[float, TaskRecord]] = []
    for task in snapshot.of_kind("task"):
        if not isinstance(task, TaskRecord) or task.id == target.id:
            continue
        score = 2.0 * sum(1 for t in task.tags if t.lower() in target_tags)
        score += sum(1 for s in task.events if s.lower() in target_subs)
        if first_word and first_word in task.title.lower():
            score += 0.5
        if score > 0:
            scored.append((score, task))

    scored.sort(key=lambda item: (-item[0], item[1].id))
    items = [
        {
            "id": task.id,
            "kind": task.kind,
            "title": task.title,
            "path": task.path,
            "url": _task_url(store, _task_handle(task)),
            "snippet": task.summary,
            "tags": list(task.tags),
            "score": score,
        }
        for score, task in scored[:limit]
    ]
    return {"items": items}


def register_tools(mcp: FastMCP, store: DataStore) -> None:
    """Register all tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        store: Data store answering queries
    """

    @mcp.tool()
    def search_tasks(
        query: str,
        limit: int = 10,
        offset: int = 0,
        fuzzy: bool = True,
        fuzzy_max_edits: int = 1,
        fuzzy_max_candidates: int = 3,
        tags: list[str] | None = None,
        subscriptions: list[str] | None = None,
    ) -> dict:
        """Search Mechanic tasks.

        Matches titles, handles, tags, subscriptions and task code, tolerating
        small typos. Query words are OR-ed; stop-word-only queries list all tasks.

        Args:
            query: Keywords to search for
            limit: Page size, 1-50 (default: 10)
            offset: Number of results to skip (default: 0)
            fuzzy: Allow typo-tolerant matching (default: true)
            fuzzy_max_edits: Max edit distance per word, 0-2 (default: 1)
            fuzzy_max_candidates: Max vocabulary matches per word, 1-5 (default: 3)
            tags: Only tasks carrying all of these tags
            subscriptions: Only tasks whose subscriptions contain all of these

        Returns:
            Dict with:
            - items: Hits with id, kind, title, path, url, snippet, tags, score,
              subscriptions, subscriptions_template, options
            - next_offset: Offset of the next page, present if more results remain
        """
        return run_search(
            store,
            "task",
            query=query,
            limit=limit,
            offset=offset,
            fuzzy=fuzzy,
            fuzzy_max_edits=fuzzy_max_edits,
            fuzzy_max_candidates=fuzzy_max_candidates,
            tags=tags,
            subscriptions=subscriptions,
        )

    @mcp.tool()
    def search_docs(
        query: str,
        limit: int = 10,
        offset: int = 0,
        fuzzy: bool = True,
        fuzzy_max_edits: int = 1,
        fuzzy_max_candidates: int = 3,
        tags: list[str] | None = None,
    ) -> dict:
        """Search Mechanic documentation pages.

        Args:
            query: Keywords to search for
            limit: Page size, 1-50 (default: 10)
            offset: Number of results to skip (default: 0)
            fuzzy: Allow typo-tolerant matching (default: true)
            fuzzy_max_edits: Max edit distance per word, 0-2 (default: 1)
            fuzzy_max_candidates: Max vocabulary matches per word, 1-5 (default: 3)
            tags: Only docs carrying all of these tags

        Returns:
            Dict with:
            - items: Hits with id, kind, title, path, url, source_url, snippet, tags, score
            - next_offset: Offset of the next page, present if more results remain
        """
        return run_search(
            store,
            "doc",
            query=query,
            limit=limit,
            offset=offset,
            fuzzy=fuzzy,
            fuzzy_max_edits=fuzzy_max_edits,
            fuzzy_max_candidates=fuzzy_max_candidates,
            tags=tags,
        )

    @mcp.tool()
    def get_task(id: str) -> dict:
        """Fetch a task by id or handle with its full payload.

        Args:
            id: Task id ("task:<handle>") or bare handle

        Returns:
            Task with id, handle, name, tags, url, subscriptions,
            subscriptions_template, options, script and JavaScript blocks,
            or an error message if not found.
        """
        return get_task_detail(store, id)

    @mcp.tool()
    def get_doc(id: str) -> dict:
        """Fetch a doc by id or relative path (use search_docs to find ids).

        Args:
            id: Doc id ("doc:<path>") or relative path

        Returns:
            Doc with id, title, path, url and markdown content,
            or an error message if not found.
        """
        return get_doc_detail(store, id)

    @mcp.tool()
    def similar_tasks(handle: str, limit: int = 5) -> dict:
        """Find tasks similar to a given task by tags, subscriptions and title.

        Args:
            handle: Task handle or id
            limit: Maximum number of results, 1-20 (default: 5)
        """
        return find_similar_tasks(store, handle, limit)

    @mcp.tool()
    def refresh_index() -> dict:
        """Pull the docs and tasks sources and rebuild the search index."""
        try:
            snapshot = store.refresh()
        except Exception as e:
            logger.exception("Refresh failed")
            return {"refreshed": False, "error": str(e)}
        return {
            "refreshed": True,
            "records": len(snapshot.records),
            "last_indexed": snapshot.last_indexed.isoformat(),
        }
