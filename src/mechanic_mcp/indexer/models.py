"""Data models for records, the built index and search results."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Literal

ResourceKind = Literal["doc", "task"]


@dataclass
class DocRecord:
    """A documentation page."""

    id: str
    title: str
    path: str
    content: str = ""
    tags: list[str] = field(default_factory=list)
    headings: list[str] = field(default_factory=list)
    section: str | None = None
    source_url: str | None = None
    kind: Literal["doc"] = "doc"


@dataclass
class TaskRecord:
    """A task definition from the task library."""

    id: str
    slug: str
    title: str
    path: str
    content: str = ""
    summary: str = ""
    tags: list[str] = field(default_factory=list)
    events: list[str] = field(default_factory=list)  # subscriptions
    actions: list[str] = field(default_factory=list)
    scopes: list[str] = field(default_factory=list)
    risk: str = "unknown"
    options: dict[str, Any] | None = None
    script: str | None = None
    online_store_javascript: str | None = None
    order_status_javascript: str | None = None
    subscriptions_template: str | None = None
    kind: Literal["task"] = "task"


Record = DocRecord | TaskRecord


def record_to_dict(record: Record) -> dict[str, Any]:
    """Serialize a record to a JSON-compatible dict."""
    return asdict(record)


def record_from_dict(data: dict[str, Any]) -> Record:
    """Rebuild a record from its dict form, dispatching on ``kind``."""
    kind = data.get("kind")
    if kind == "doc":
        return DocRecord(**data)
    if kind == "task":
        return TaskRecord(**data)
    raise ValueError(f"Unknown record kind: {kind!r}")


@dataclass(frozen=True)
class IndexedDocument:
    """Per-record field text and token counts. Owned by the index."""

    id: str
    kind: ResourceKind
    path: str
    tags: tuple[str, ...]
    field_text: dict[str, str]
    token_freq: dict[str, dict[str, int]]
    raw: Record


@dataclass(frozen=True)
class BuiltIndex:
    """Immutable snapshot of the whole corpus index."""

    documents: tuple[IndexedDocument, ...]
    doc_freq: dict[str, int]
    total_documents: int


@dataclass
class SearchOptions:
    """Query options for a search call."""

    query: str
    kind: ResourceKind | None = None
    limit: int = 10
    offset: int = 0
    fuzzy: bool = True
    fuzzy_max_edits: int = 1
    fuzzy_max_candidates: int = 3
    tags: list[str] | None = None
    subscriptions: list[str] | None = None

    def validate(self) -> None:
        """Raise ValueError if any option is outside its allowed range."""
        if not self.query or not self.query.strip():
            raise ValueError("query must be a non-empty string")
        if self.kind not in (None, "doc", "task"):
            raise ValueError(f"kind must be 'doc' or 'task', got {self.kind!r}")
        if not 1 <= self.limit <= 50:
            raise ValueError(f"limit must be between 1 and 50, got {self.limit}")
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")
        if not 0 <= self.fuzzy_max_edits <= 2:
            raise ValueError(
                f"fuzzy_max_edits must be between 0 and 2, got {self.fuzzy_max_edits}"
            )
        if not 1 <= self.fuzzy_max_candidates <= 5:
            raise ValueError(
                "fuzzy_max_candidates must be between 1 and 5, "
                f"got {self.fuzzy_max_candidates}"
            )


@dataclass
class SearchHit:
    """A single ranked search result."""

    id: str
    kind: ResourceKind
    title: str
    path: str
    snippet: str
    tags: list[str]
    score: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SearchResponse:
    """A page of search hits plus the offset of the next page, if any."""

    items: list[SearchHit]
    next_offset: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"items": [hit.to_dict() for hit in self.items]}
        if self.next_offset is not None:
            result["next_offset"] = self.next_offset
        return result


@dataclass(frozen=True)
class Snapshot:
    """Records and their index, published together."""

    records: tuple[Record, ...]
    index: BuiltIndex
    last_indexed: datetime
    by_id: dict[str, Record] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_id", {r.id: r for r in self.records})

    def get(self, record_id: str) -> Record | None:
        return self.by_id.get(record_id)

    def of_kind(self, kind: ResourceKind) -> list[Record]:
        return [r for r in self.records if r.kind == kind]
