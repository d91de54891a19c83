"""MCP Resources for mechanic-mcp.

Docs are exposed as read-only markdown resources addressed by their
percent-encoded record id.
"""

from urllib.parse import quote, unquote

from mechanic_mcp.indexer.models import DocRecord
from mechanic_mcp.store import DataStore

URI_SCHEME = "mechanic-docs://"


def encode_doc_uri(doc_id: str) -> str:
    """Resource URI for a doc id; the id is fully percent-encoded."""
    return f"{URI_SCHEME}{quote(doc_id, safe='')}"


def decode_doc_id(encoded: str) -> str:
    """Inverse of the encoding in encode_doc_uri; tolerant of plain ids."""
    return unquote(encoded)


def get_docs_index_resource(store: DataStore) -> str:
    """Resource: mechanic-docs://index

    Lists every doc with its resource URI.
    """
    docs = store.records_of_kind("doc")
    lines = ["# Mechanic Docs\n", f"Total docs: {len(docs)}\n", "\n"]
    for doc in docs:
        url = doc.source_url if isinstance(doc, DocRecord) and doc.source_url else doc.path
        lines.append(f"- [{doc.title}]({encode_doc_uri(doc.id)}) - {url}\n")
    return "".join(lines)


def get_doc_resource(store: DataStore, encoded_id: str) -> str:
    """Resource: mechanic-docs://{doc_id}

    Returns the markdown content of a doc.

    Raises:
        ValueError: If no doc has this id
    """
    doc_id = decode_doc_id(encoded_id)
    record = store.get_record(doc_id)
    if not isinstance(record, DocRecord):
        raise ValueError(f"Doc '{doc_id}' not found")
    return record.content


def register_resources(mcp, store: DataStore) -> None:
    """Register all resources with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        store: Data store holding the docs
    """

    @mcp.resource(f"{URI_SCHEME}index", mime_type="text/markdown")
    def docs_index() -> str:
        """List all Mechanic docs with their resource URIs."""
        return get_docs_index_resource(store)

    @mcp.resource(URI_SCHEME + "{doc_id}", mime_type="text/markdown")
    def read_doc(doc_id: str) -> str:
        """Read a Mechanic doc by its percent-encoded id."""
        return get_doc_resource(store, doc_id)
