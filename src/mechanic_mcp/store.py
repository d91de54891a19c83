"""Process-wide data store holding the current records and index snapshot."""

import logging
import threading
from collections.abc import Sequence
from datetime import datetime

from mechanic_mcp.bundle import load_bundled_records
from mechanic_mcp.config import Config
from mechanic_mcp.git import sync_repo
from mechanic_mcp.indexer import build_index, load_docs, load_tasks, search
from mechanic_mcp.indexer.models import (
    Record,
    ResourceKind,
    SearchOptions,
    SearchResponse,
    Snapshot,
)

logger = logging.getLogger(__name__)


class DataStore:
    """
    Holds an immutable Snapshot of records and their index.

    Thread Safety:
        Publishing is serialized by a lock and replaces the snapshot with a
        single reference assignment. Readers never lock; a reader that
        grabbed the previous snapshot keeps a consistent view of it.
    """

    def __init__(self, config: Config | None = None):
        """
        Initialize an empty store.

        Args:
            config: Source configuration. Required for refresh(); stores
                built with from_records() can omit it.
        """
        self.config = config
        self._write_lock = threading.Lock()
        self._bundled = False
        self._snapshot = Snapshot(
            records=(), index=build_index([]), last_indexed=datetime.now()
        )

    @classmethod
    def from_records(cls, records: Sequence[Record]) -> "DataStore":
        """Create a store already holding the given records."""
        store = cls()
        store.publish(records)
        return store

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def bundled(self) -> bool:
        """True when serving a prebuilt bundle, which refresh() never replaces."""
        return self._bundled

    def publish(self, records: Sequence[Record]) -> Snapshot:
        """Build an index over records and make it the current snapshot."""
        max_docs = self.config.max_docs if self.config else None
        if max_docs is not None and len(records) > max_docs:
            logger.warning(
                "Corpus has %d records, indexing only the first %d", len(records), max_docs
            )
            records = records[:max_docs]

        with self._write_lock:
            snapshot = Snapshot(
                records=tuple(records),
                index=build_index(records),
                last_indexed=datetime.now(),
            )
            self._snapshot = snapshot

        docs = sum(1 for r in snapshot.records if r.kind == "doc")
        logger.info(
            "Index published (docs=%d, tasks=%d)", docs, len(snapshot.records) - docs
        )
        return snapshot

    def load_records(self, sync: bool = True) -> list[Record]:
        """
        Load records from the source repositories.

        Args:
            sync: Pull the source repositories before reading them.

        Raises:
            GitSyncError: If a repository sync fails.
        """
        if self.config is None:
            raise RuntimeError("DataStore has no config to load records from")
        if sync:
            sync_repo(self.config.docs)
            sync_repo(self.config.tasks)
        docs = load_docs(self.config.docs.local_path, self.config.docs_base_url)
        tasks = load_tasks(self.config.tasks.local_path, self.config.tasks_base_url)
        return [*docs, *tasks]

    def initialize(self, sync: bool = True) -> Snapshot:
        """Load the initial corpus, preferring a prebuilt bundle."""
        if self.config is None:
            raise RuntimeError("DataStore has no config to initialize from")
        bundled = load_bundled_records(self.config.data_dir)
        if bundled is not None:
            logger.info("Using bundled records from %s", self.config.data_dir)
            self._bundled = True
            return self.publish(bundled)
        return self.publish(self.load_records(sync=sync))

    def refresh(self) -> Snapshot:
        """
        Re-sync sources and rebuild the index.

        A store serving a prebuilt bundle has no sources to pull from and
        keeps its current snapshot.
        """
        if self._bundled:
            logger.info("Serving bundled records, skipping refresh")
            return self._snapshot
        return self.publish(self.load_records(sync=True))

    # Query methods. Each reads the snapshot once; several reads over one
    # corpus version must go through a held `snapshot`.

    def search(self, options: SearchOptions) -> SearchResponse:
        """Search the current snapshot."""
        return search(self._snapshot.index, options)

    def get_record(self, record_id: str) -> Record | None:
        """Get a record by id from the current snapshot."""
        return self._snapshot.get(record_id)

    def records_of_kind(self, kind: ResourceKind) -> list[Record]:
        return self._snapshot.of_kind(kind)
