"""Parsers for markdown docs (YAML frontmatter) and task JSON files."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from mechanic_mcp.indexer.models import DocRecord, TaskRecord

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^#{1,3}\s+(.*)$")


@dataclass
class FrontmatterData:
    """Parsed frontmatter data."""

    title: str | None = None
    tags: list[str] | None = None


def parse_tags(value: Any) -> list[str]:
    """Accept tags as a list or a comma-separated string."""
    if isinstance(value, list):
        return [str(tag) for tag in value]
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return []


def parse_frontmatter(content: str, file_path: str) -> tuple[FrontmatterData, str]:
    """
    Parse YAML frontmatter from markdown content.

    Args:
        content: The full markdown content
        file_path: Relative path, used for log messages only

    Returns:
        Tuple of (FrontmatterData, content_without_frontmatter)
    """
    data = FrontmatterData()
    body = content

    if content.startswith("---"):
        parts = content.split("---", 2)
        if len(parts) >= 3:
            try:
                raw = yaml.safe_load(parts[1])
                if isinstance(raw, dict):
                    title = raw.get("title")
                    if title is not None:
                        data.title = str(title)
                    data.tags = parse_tags(raw.get("tags"))
                    body = parts[2].lstrip("\n")
            except yaml.YAMLError as e:
                logger.debug("Invalid YAML frontmatter in %s: %s", file_path, e)

    return data, body


def extract_headings(content: str) -> list[str]:
    """All level 1-3 headings, in document order."""
    headings = []
    for line in content.split("\n"):
        match = HEADING_PATTERN.match(line.strip())
        if match:
            headings.append(match.group(1).strip())
    return headings


def parse_doc(content: str, relative_path: str, base_url: str) -> DocRecord:
    """Build a DocRecord from a markdown file's content."""
    metadata, body = parse_frontmatter(content, relative_path)
    headings = extract_headings(body)
    path = Path(relative_path)
    title = metadata.title or (headings[0] if headings else path.stem)
    url_path = relative_path.replace("\\", "/")
    url = f"{base_url}/{url_path}"

    return DocRecord(
        id=f"doc:{relative_path}",
        title=title,
        path=url,
        section=path.parts[0],
        tags=metadata.tags or [],
        headings=headings,
        content=body,
        source_url=url,
    )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def parse_task(raw_json: str, handle: str, base_url: str) -> TaskRecord:
    """
    Build a TaskRecord from a task library JSON file.

    Raises:
        ValueError: If the JSON is malformed or not an object.
    """
    data = json.loads(raw_json)
    if not isinstance(data, dict):
        raise ValueError(f"Task {handle} is not a JSON object")

    tags = data.get("tags")
    subscriptions = data.get("subscriptions")
    options = data.get("options")
    summary = _as_text(data.get("docs"))

    content_parts = [
        summary,
        _as_text(data.get("subscriptions_template")),
        _as_text(data.get("script")),
        _as_text(data.get("online_store_javascript")),
        _as_text(data.get("order_status_javascript")),
    ]

    return TaskRecord(
        id=f"task:{handle}",
        slug=handle,
        title=_as_text(data.get("name")) or handle,
        path=f"{base_url}/{handle}",
        summary=summary,
        tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        events=[str(s) for s in subscriptions] if isinstance(subscriptions, list) else [],
        options=options if isinstance(options, dict) else None,
        script=data.get("script"),
        online_store_javascript=data.get("online_store_javascript"),
        order_status_javascript=data.get("order_status_javascript"),
        subscriptions_template=data.get("subscriptions_template"),
        content="\n\n".join(part for part in content_parts if part),
    )
