"""Weighted text fields extracted from each record kind."""

from collections.abc import Callable
from dataclasses import dataclass

from mechanic_mcp.indexer.models import DocRecord, Record, TaskRecord


@dataclass(frozen=True)
class FieldSpec:
    """Scoring weight and text extractor for one field."""

    weight: float
    extractor: Callable[[Record], str]


def _join(values: list[str] | None) -> str:
    return " ".join(values or [])


def _doc_only(extract: Callable[[DocRecord], str]) -> Callable[[Record], str]:
    def extractor(record: Record) -> str:
        match record:
            case DocRecord():
                return extract(record)
            case TaskRecord():
                return ""

    return extractor


def _task_only(extract: Callable[[TaskRecord], str]) -> Callable[[Record], str]:
    def extractor(record: Record) -> str:
        match record:
            case TaskRecord():
                return extract(record)
            case DocRecord():
                return ""

    return extractor


# Every field applies to every record; inapplicable fields yield "".
FIELD_CONFIG: dict[str, FieldSpec] = {
    "title": FieldSpec(5.0, lambda record: record.title or ""),
    "slug": FieldSpec(4.0, _task_only(lambda task: task.slug or "")),
    "tags": FieldSpec(3.5, lambda record: _join(record.tags)),
    "headings": FieldSpec(3.0, _doc_only(lambda doc: _join(doc.headings))),
    "section": FieldSpec(2.0, _doc_only(lambda doc: doc.section or "")),
    "events": FieldSpec(2.0, _task_only(lambda task: _join(task.events))),
    "actions": FieldSpec(2.0, _task_only(lambda task: _join(task.actions))),
    "scopes": FieldSpec(2.0, _task_only(lambda task: _join(task.scopes))),
    "content": FieldSpec(1.5, lambda record: record.content or ""),
}


def field_weight(name: str) -> float:
    spec = FIELD_CONFIG.get(name)
    return spec.weight if spec else 1.0


def extract_fields(record: Record) -> dict[str, str]:
    """Return the text of every configured field for a record."""
    return {name: spec.extractor(record) for name, spec in FIELD_CONFIG.items()}
