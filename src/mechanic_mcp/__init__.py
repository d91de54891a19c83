"""
mechanic-mcp - MCP server for Mechanic documentation and the task library.

Indexes docs and task definitions in memory and serves ranked, filterable,
typo-tolerant search over them to any MCP client.

Stack:
- Python + FastMCP
- In-memory weighted TF-IDF index with fuzzy matching
- stdio or SSE transport
"""

__version__ = "0.1.0"
