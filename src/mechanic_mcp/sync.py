"""Background sync manager for periodic index refreshes.

Runs a daemon thread that periodically calls store.refresh() to pull the
source repositories and publish a rebuilt index.
"""

import logging
import threading

from mechanic_mcp.store import DataStore

logger = logging.getLogger(__name__)


class SyncManager:
    """Manages periodic background refresh of the data store.

    The sync thread is a daemon, so it automatically terminates when the
    main process exits.
    """

    def __init__(self, store: DataStore, interval: int):
        """Initialize the sync manager.

        Args:
            store: The data store to refresh.
            interval: Refresh interval in seconds. Must be > 0.
        """
        if interval <= 0:
            raise ValueError(f"Sync interval must be positive, got {interval}")

        self._store = store
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start the background sync thread."""
        if self._thread is not None and self._thread.is_alive():
            logger.warning("Sync thread already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._sync_loop,
            name="mechanic-sync",
            daemon=True,
        )
        self._thread.start()
        logger.info("Sync manager started (interval: %ds)", self._interval)

    def stop(self) -> None:
        """Stop the background sync thread.

        Blocks until the thread terminates (up to one interval).
        """
        if self._thread is None or not self._thread.is_alive():
            return

        self._stop_event.set()
        self._thread.join(timeout=self._interval + 1)
        if self._thread.is_alive():
            logger.warning("Sync thread did not stop cleanly")
        else:
            logger.info("Sync manager stopped")
        self._thread = None

    def refresh_once(self) -> tuple[int, int]:
        """Refresh the store and report how the corpus changed.

        Returns:
            Tuple of (records added, records removed), compared by id.
        """
        before = self._store.snapshot.by_id.keys()
        after = self._store.refresh().by_id.keys()
        added = len(after - before)
        removed = len(before - after)
        if added or removed:
            logger.info(
                "Auto-sync: %d added, %d removed (%d records)", added, removed, len(after)
            )
        else:
            logger.debug("Auto-sync: no record changes (%d records)", len(after))
        return added, removed

    def _sync_loop(self) -> None:
        """Main sync loop - runs in background thread."""
        logger.debug("Sync loop started")

        while not self._stop_event.is_set():
            # Sleep first, then refresh (allows immediate shutdown on start)
            if self._stop_event.wait(timeout=self._interval):
                break

            try:
                self.refresh_once()
            except Exception:
                logger.exception("Error during auto-sync")

        logger.debug("Sync loop stopped")
