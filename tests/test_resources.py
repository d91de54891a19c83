"""Tests for MCP resources."""

import pytest
from fastmcp import FastMCP

from mechanic_mcp.resources import (
    decode_doc_id,
    encode_doc_uri,
    get_doc_resource,
    get_docs_index_resource,
    register_resources,
)
from mechanic_mcp.store import DataStore


class TestDocUris:
    def test_encode_escapes_separators(self):
        assert encode_doc_uri("doc:core/tasks.md") == "mechanic-docs://doc%3Acore%2Ftasks.md"

    def test_decode_restores_id(self):
        assert decode_doc_id("doc%3Acore%2Ftasks.md") == "doc:core/tasks.md"

    def test_decode_plain_id(self):
        assert decode_doc_id("doc:README.md") == "doc:README.md"


class TestDocsIndex:
    def test_lists_every_doc(self, store: DataStore):
        result = get_docs_index_resource(store)
        assert result.startswith("# Mechanic Docs")
        assert "Total docs: 4" in result
        assert "[Tasks](mechanic-docs://doc%3Acore%2Ftasks.md)" in result
        assert "https://learn.mechanic.dev/core/tasks.md" in result

    def test_excludes_tasks(self, store: DataStore):
        assert "tasks.mechanic.dev" not in get_docs_index_resource(store)


class TestDocResource:
    def test_returns_content(self, store: DataStore):
        content = get_doc_resource(store, "doc%3Acore%2Ftasks.md")
        assert content.startswith("# Tasks")
        assert "## Subscriptions" in content

    def test_missing_doc(self, store: DataStore):
        with pytest.raises(ValueError, match="not found"):
            get_doc_resource(store, "doc%3Amissing.md")

    def test_task_id_is_not_a_doc(self, store: DataStore):
        with pytest.raises(ValueError):
            get_doc_resource(store, "task:email-on-refund")


def test_register_resources(store: DataStore):
    mcp = FastMCP()
    register_resources(mcp, store)

    assert "mechanic-docs://index" in mcp._resource_manager._resources
    assert "mechanic-docs://{doc_id}" in mcp._resource_manager._templates
