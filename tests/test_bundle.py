"""Tests for record bundles."""

import gzip
import json
import logging

from mechanic_mcp.bundle import (
    MANIFEST_FILE,
    RECORDS_FILE,
    load_bundled_records,
    read_manifest,
    write_bundle,
)
from mechanic_mcp.indexer.models import DocRecord, TaskRecord


def sample_records():
    return [
        DocRecord(id="doc:a.md", title="A", path="https://learn.mechanic.dev/a.md", headings=["A"]),
        TaskRecord(
            id="task:b",
            slug="b",
            title="B",
            path="https://tasks.mechanic.dev/b",
            events=["shopify/orders/create"],
            options={"x": 1},
        ),
    ]


class TestWriteBundle:
    def test_writes_records_and_manifest(self, tmp_path):
        data_dir = tmp_path / "nested" / "data"
        records_path = write_bundle(sample_records(), data_dir, sources={"docs_path": "/docs"})

        assert records_path == data_dir / RECORDS_FILE
        payload = json.loads(gzip.decompress(records_path.read_bytes()))
        assert [item["id"] for item in payload] == ["doc:a.md", "task:b"]

        manifest = json.loads((data_dir / MANIFEST_FILE).read_text())
        assert manifest["counts"] == {"docs": 1, "tasks": 1, "total": 2}
        assert manifest["sources"] == {"docs_path": "/docs"}
        assert "built_at" in manifest


class TestLoadBundledRecords:
    def test_restores_typed_records(self, tmp_path):
        original = sample_records()
        write_bundle(original, tmp_path)
        loaded = load_bundled_records(tmp_path)
        assert loaded == original
        assert isinstance(loaded[0], DocRecord)
        assert isinstance(loaded[1], TaskRecord)

    def test_missing_bundle(self, tmp_path):
        assert load_bundled_records(tmp_path) is None

    def test_corrupt_bundle(self, tmp_path, caplog):
        (tmp_path / RECORDS_FILE).write_bytes(b"not gzip")
        with caplog.at_level(logging.WARNING):
            assert load_bundled_records(tmp_path) is None
        assert any("Failed to load bundled records" in r.message for r in caplog.records)

    def test_unknown_kind(self, tmp_path):
        payload = json.dumps([{"id": "x", "kind": "video"}]).encode()
        (tmp_path / RECORDS_FILE).write_bytes(gzip.compress(payload))
        assert load_bundled_records(tmp_path) is None


class TestReadManifest:
    def test_missing(self, tmp_path):
        assert read_manifest(tmp_path) is None

    def test_invalid(self, tmp_path):
        (tmp_path / MANIFEST_FILE).write_text("{")
        assert read_manifest(tmp_path) is None

    def test_round_trip(self, tmp_path):
        write_bundle(sample_records(), tmp_path)
        assert read_manifest(tmp_path)["counts"]["total"] == 2
