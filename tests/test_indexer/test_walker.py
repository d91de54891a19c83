"""Tests for the docs and tasks walkers."""

import logging
from pathlib import Path

import pytest

from mechanic_mcp.indexer.walker import load_docs, load_tasks, walk_docs_root, walk_tasks_root

DOCS_URL = "https://learn.mechanic.dev"
TASKS_URL = "https://tasks.mechanic.dev"


@pytest.fixture
def fixtures_root() -> Path:
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def docs_root(fixtures_root: Path) -> Path:
    return fixtures_root / "mechanic-docs"


@pytest.fixture
def tasks_root(fixtures_root: Path) -> Path:
    return fixtures_root / "mechanic-tasks"


class TestWalkDocsRoot:
    def test_finds_markdown_files_sorted(self, docs_root: Path):
        files = [p.relative_to(docs_root).as_posix() for p in walk_docs_root(docs_root)]
        assert files == [
            "README.md",
            "core/events/topics.mdx",
            "core/tasks.md",
            "techniques/tagging.md",
        ]

    def test_skips_hidden_and_non_markdown(self, docs_root: Path):
        names = {p.name for p in walk_docs_root(docs_root)}
        assert "hidden.md" not in names
        assert "notes.txt" not in names

    def test_missing_root(self, tmp_path: Path, caplog):
        with caplog.at_level(logging.WARNING):
            assert list(walk_docs_root(tmp_path / "missing")) == []
        assert any("Docs path not found" in r.message for r in caplog.records)


class TestWalkTasksRoot:
    def test_finds_json_files(self, tasks_root: Path):
        names = [p.name for p in walk_tasks_root(tasks_root)]
        assert names == [
            "auto-tag-new-orders.json",
            "broken.json",
            "email-on-refund.json",
            "tag-customers-by-spend.json",
        ]

    def test_missing_tasks_dir(self, tmp_path: Path, caplog):
        with caplog.at_level(logging.WARNING):
            assert list(walk_tasks_root(tmp_path)) == []
        assert any("Tasks path not found" in r.message for r in caplog.records)


class TestLoadDocs:
    def test_loads_records(self, docs_root: Path):
        docs = load_docs(docs_root, DOCS_URL)
        by_id = {d.id: d for d in docs}

        assert set(by_id) == {
            "doc:README.md",
            "doc:core/events/topics.mdx",
            "doc:core/tasks.md",
            "doc:techniques/tagging.md",
        }

        tasks_doc = by_id["doc:core/tasks.md"]
        assert tasks_doc.title == "Tasks"
        assert tasks_doc.tags == ["tasks", "core"]
        assert tasks_doc.headings == ["Tasks", "Subscriptions", "Options"]
        assert tasks_doc.section == "core"
        assert tasks_doc.path == f"{DOCS_URL}/core/tasks.md"

        topics = by_id["doc:core/events/topics.mdx"]
        assert topics.title == "Event topics"
        assert topics.tags == ["events", "topics"]

        assert by_id["doc:techniques/tagging.md"].title == "tagging"
        assert by_id["doc:README.md"].title == "Introduction"
        assert by_id["doc:README.md"].section == "README.md"

    def test_skips_invalid_utf8(self, tmp_path: Path):
        (tmp_path / "good.md").write_text("# Good")
        (tmp_path / "bad.md").write_bytes(b"# Bad \xff\xfe")
        docs = load_docs(tmp_path, DOCS_URL)
        assert [d.id for d in docs] == ["doc:good.md"]


class TestLoadTasks:
    def test_loads_valid_tasks_and_skips_broken(self, tasks_root: Path, caplog):
        with caplog.at_level(logging.WARNING):
            tasks = load_tasks(tasks_root, TASKS_URL)

        assert [t.id for t in tasks] == [
            "task:auto-tag-new-orders",
            "task:email-on-refund",
            "task:tag-customers-by-spend",
        ]
        assert any("broken.json" in r.message for r in caplog.records)

    def test_task_fields(self, tasks_root: Path):
        tasks = {t.slug: t for t in load_tasks(tasks_root, TASKS_URL)}
        spend = tasks["tag-customers-by-spend"]
        assert spend.title == "Tag customers by total spend"
        assert spend.events == ["shopify/customers/update", "mechanic/user/trigger"]
        assert spend.tags == ["Customers", "Tagging"]
        assert spend.path == f"{TASKS_URL}/tag-customers-by-spend"
        assert spend.content.startswith("Tags customers whose total spend")
