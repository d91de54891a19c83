"""Tests for field extraction and index building."""

import pytest

from mechanic_mcp.indexer.builder import build_index, compute_doc_freq, index_record
from mechanic_mcp.indexer.fields import FIELD_CONFIG, extract_fields, field_weight
from mechanic_mcp.indexer.models import DocRecord, TaskRecord


@pytest.fixture
def doc() -> DocRecord:
    return DocRecord(
        id="doc:core/refunds.md",
        title="Refund policy",
        path="https://learn.mechanic.dev/core/refunds.md",
        content="Refunds are issued within 5 days. Refund requests go to support.",
        tags=["billing", "orders"],
        headings=["Refund policy", "Timing"],
        section="core",
    )


@pytest.fixture
def task() -> TaskRecord:
    return TaskRecord(
        id="task:refund-order",
        slug="refund-order",
        title="Refund order",
        path="https://tasks.mechanic.dev/refund-order",
        content="Refunds an order when tagged",
        tags=["orders"],
        events=["shopify/orders/updated"],
        actions=["shopify"],
        scopes=["write_orders"],
    )


class TestExtractFields:
    def test_all_fields_present_for_doc(self, doc: DocRecord):
        fields = extract_fields(doc)
        assert set(fields) == set(FIELD_CONFIG)
        assert fields["title"] == "Refund policy"
        assert fields["tags"] == "billing orders"
        assert fields["headings"] == "Refund policy Timing"
        assert fields["section"] == "core"
        assert fields["slug"] == ""
        assert fields["events"] == ""
        assert fields["actions"] == ""
        assert fields["scopes"] == ""

    def test_all_fields_present_for_task(self, task: TaskRecord):
        fields = extract_fields(task)
        assert set(fields) == set(FIELD_CONFIG)
        assert fields["slug"] == "refund-order"
        assert fields["events"] == "shopify/orders/updated"
        assert fields["actions"] == "shopify"
        assert fields["scopes"] == "write_orders"
        assert fields["headings"] == ""
        assert fields["section"] == ""

    def test_doc_without_section(self, doc: DocRecord):
        doc.section = None
        assert extract_fields(doc)["section"] == ""

    def test_weights(self):
        assert field_weight("title") == 5
        assert field_weight("slug") == 4
        assert field_weight("tags") == 3.5
        assert field_weight("headings") == 3
        assert field_weight("section") == 2
        assert field_weight("events") == 2
        assert field_weight("actions") == 2
        assert field_weight("scopes") == 2
        assert field_weight("content") == 1.5


class TestIndexRecord:
    def test_token_freq_per_field(self, doc: DocRecord):
        indexed = index_record(doc)
        assert indexed.id == doc.id
        assert indexed.kind == "doc"
        assert indexed.raw is doc
        assert indexed.token_freq["title"] == {"refund": 1, "policy": 1}
        assert indexed.token_freq["content"]["refunds"] == 1
        assert indexed.token_freq["content"]["refund"] == 1
        assert indexed.token_freq["slug"] == {}

    def test_empty_record_does_not_crash(self):
        indexed = index_record(DocRecord(id="doc:empty", title="", path=""))
        assert set(indexed.token_freq) == set(FIELD_CONFIG)
        assert all(counts == {} for counts in indexed.token_freq.values())


class TestBuildIndex:
    def test_totals(self, doc: DocRecord, task: TaskRecord):
        index = build_index([doc, task])
        assert index.total_documents == 2
        assert [d.id for d in index.documents] == [doc.id, task.id]

    def test_doc_freq_is_field_union(self, doc: DocRecord, task: TaskRecord):
        index = build_index([doc, task])
        # "refund" occurs in several fields of both records
        assert index.doc_freq["refund"] == 2
        # "orders" is a doc tag and part of the task's tags and events
        assert index.doc_freq["orders"] == 2
        assert index.doc_freq["policy"] == 1
        assert index.doc_freq["write"] == 1

    def test_empty_corpus(self):
        index = build_index([])
        assert index.total_documents == 0
        assert index.doc_freq == {}
        assert index.documents == ()

    def test_rebuild_creates_new_value(self, doc: DocRecord, task: TaskRecord):
        first = build_index([doc])
        second = build_index([doc, task])
        assert first.total_documents == 1
        assert second.total_documents == 2
        assert "order" not in first.doc_freq

    def test_compute_doc_freq_counts_once_per_document(self, doc: DocRecord):
        indexed = index_record(doc)
        assert compute_doc_freq([indexed, indexed])["refund"] == 2
