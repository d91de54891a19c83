"""Prebuilt record bundles.

A bundle is a gzip-compressed JSON list of records plus a manifest. The
index itself is never persisted; it is rebuilt from the records at load.
"""

import gzip
import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from mechanic_mcp.indexer.models import Record, record_from_dict, record_to_dict

logger = logging.getLogger(__name__)

RECORDS_FILE = "records.json.gz"
MANIFEST_FILE = "manifest.json"


def write_bundle(
    records: Sequence[Record],
    data_dir: Path,
    sources: dict[str, str] | None = None,
) -> Path:
    """
    Write records and a manifest to data_dir.

    Returns:
        Path to the written records file.
    """
    data_dir.mkdir(parents=True, exist_ok=True)
    records_path = data_dir / RECORDS_FILE

    payload = json.dumps([record_to_dict(r) for r in records], ensure_ascii=False)
    records_path.write_bytes(gzip.compress(payload.encode("utf-8")))

    docs = sum(1 for r in records if r.kind == "doc")
    tasks = sum(1 for r in records if r.kind == "task")
    manifest = {
        "built_at": datetime.now(timezone.utc).isoformat(),
        "counts": {"docs": docs, "tasks": tasks, "total": len(records)},
        "sources": sources or {},
    }
    (data_dir / MANIFEST_FILE).write_text(json.dumps(manifest, indent=2), encoding="utf-8")

    logger.info(
        "Wrote bundle (docs=%d, tasks=%d) to %s", docs, tasks, records_path
    )
    return records_path


def load_bundled_records(data_dir: Path) -> list[Record] | None:
    """Load records from a bundle, or None if there is no usable bundle."""
    records_path = data_dir / RECORDS_FILE
    if not records_path.exists():
        logger.info("No bundled records found in %s", data_dir)
        return None

    try:
        raw = gzip.decompress(records_path.read_bytes()).decode("utf-8")
        return [record_from_dict(item) for item in json.loads(raw)]
    except (OSError, ValueError, TypeError) as e:
        logger.warning("Failed to load bundled records from %s: %s", records_path, e)
        return None


def read_manifest(data_dir: Path) -> dict | None:
    """Read the bundle manifest, if present."""
    manifest_path = data_dir / MANIFEST_FILE
    if not manifest_path.exists():
        return None
    try:
        return json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Unable to read manifest at %s: %s", manifest_path, e)
        return None
