"""Walkers that discover docs and tasks on disk and turn them into records."""

import logging
from collections.abc import Iterator
from pathlib import Path

from mechanic_mcp.indexer.models import DocRecord, TaskRecord
from mechanic_mcp.indexer.parser import parse_doc, parse_task

logger = logging.getLogger(__name__)

DOC_EXTENSIONS = {".md", ".mdx"}
TASKS_SUBDIR = "tasks"


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def walk_docs_root(docs_root: Path) -> Iterator[Path]:
    """
    Yield every non-hidden markdown file under docs_root, sorted.

    Structure expected:
    <DOCS_ROOT>/
    ├── core/
    │   ├── tasks.md
    │   └── events/
    │       └── topics.md
    └── techniques/
        └── ...
    """
    if not docs_root.exists():
        logger.warning("Docs path not found (%s); returning no docs", docs_root)
        return

    for file_path in sorted(docs_root.rglob("*")):
        if not file_path.is_file() or file_path.suffix not in DOC_EXTENSIONS:
            continue
        if _is_hidden(file_path.relative_to(docs_root)):
            continue
        yield file_path


def walk_tasks_root(tasks_root: Path) -> Iterator[Path]:
    """Yield every non-hidden ``<tasks_root>/tasks/*.json`` file, sorted."""
    task_dir = tasks_root / TASKS_SUBDIR
    if not task_dir.is_dir():
        logger.warning("Tasks path not found (%s); returning no tasks", task_dir)
        return

    for file_path in sorted(task_dir.glob("*.json")):
        if file_path.is_file() and not file_path.name.startswith("."):
            yield file_path


def load_docs(docs_root: Path, base_url: str) -> list[DocRecord]:
    """Read and parse all docs under docs_root."""
    records = []
    for file_path in walk_docs_root(docs_root):
        relative_path = file_path.relative_to(docs_root).as_posix()
        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning(
                "Skipping file with invalid UTF-8 encoding: %s (%s)", relative_path, e
            )
            continue
        records.append(parse_doc(content, relative_path, base_url))
    logger.info("Loaded %d docs from %s", len(records), docs_root)
    return records


def load_tasks(tasks_root: Path, base_url: str) -> list[TaskRecord]:
    """Read and parse all task JSON files under tasks_root."""
    records = []
    for file_path in walk_tasks_root(tasks_root):
        try:
            raw = file_path.read_text(encoding="utf-8")
            records.append(parse_task(raw, file_path.stem, base_url))
        except (UnicodeDecodeError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Skipping invalid task file %s: %s", file_path.name, e)
    logger.info("Loaded %d tasks from %s", len(records), tasks_root)
    return records

