"""Snippet extraction for search hits."""

from collections.abc import Sequence

from mechanic_mcp.indexer.models import DocRecord, Record, TaskRecord

SNIPPET_LENGTH = 200
ELLIPSIS = "…"


def build_snippet(text: str | None, tokens: Sequence[str], length: int = SNIPPET_LENGTH) -> str:
    """
    Return a window of ``length`` characters around the first token found.

    Tokens are tried in order and matched case-insensitively as substrings.
    Ellipsis markers show where the window was cut. Without a match the
    leading ``length`` characters are returned.
    """
    if not text:
        return ""
    lower = text.lower()
    for token in tokens:
        if not token:
            continue
        idx = lower.find(token)
        if idx == -1:
            continue
        start = max(0, idx - length // 2)
        end = min(len(text), start + length)
        prefix = ELLIPSIS if start > 0 else ""
        suffix = ELLIPSIS if end < len(text) else ""
        return f"{prefix}{text[start:end].strip()}{suffix}"
    return text[:length].strip()


def record_snippet(record: Record, tokens: Sequence[str]) -> str:
    """Snippet for a hit; doc snippets are prefixed with their first heading."""
    match record:
        case DocRecord():
            heading = record.headings[0] if record.headings else record.title
            return f"{heading}: {build_snippet(record.content, tokens)}"
        case TaskRecord():
            return build_snippet(record.content, tokens)
