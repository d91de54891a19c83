"""Main entry point for mechanic-mcp MCP server."""

import argparse
import logging
import sys
from pathlib import Path

from fastmcp import FastMCP

from mechanic_mcp.bundle import read_manifest, write_bundle
from mechanic_mcp.config import Config, get_config
from mechanic_mcp.resources import register_resources
from mechanic_mcp.store import DataStore
from mechanic_mcp.sync import SyncManager
from mechanic_mcp.tools import register_tools

logger = logging.getLogger(__name__)

INSTRUCTIONS = "\n".join(
    [
        "You are an assistant helping developers write and customize Mechanic tasks in Liquid.",
        "Use search_tasks for task library queries and search_docs for Mechanic docs.",
        "Use get_task for tasks only; use get_doc or the mechanic-docs:// resources for docs.",
        "Inputs: query (required); limit<=50; offset>=0; fuzzy_max_edits<=2; "
        "fuzzy_max_candidates<=5.",
        "Always cite public URLs (tasks.mechanic.dev/{handle}, learn.mechanic.dev/{path}), "
        "never local repo paths.",
        "Recommend existing library tasks first; build new only if no close match.",
    ]
)


def create_server(config: Config, store: DataStore) -> FastMCP:
    """Create and configure the MCP server with all components.

    Args:
        config: Configuration instance with all settings.
        store: Data store, already initialized.
    """
    mcp = FastMCP(name="mechanic-mcp", instructions=INSTRUCTIONS)

    logger.info("Registering resources...")
    register_resources(mcp, store)

    logger.info("Registering tools...")
    register_tools(mcp, store)

    logger.info("Server configured successfully")
    return mcp


def build_data(config: Config, output_dir: Path) -> int:
    """Load records from the source repositories and write a bundle.

    Returns the number of records written.
    """
    store = DataStore(config)
    records = store.load_records(sync=True)
    write_bundle(
        records,
        output_dir,
        sources={
            "docs_path": str(config.docs.local_path),
            "tasks_path": str(config.tasks.local_path),
        },
    )
    return len(records)


def main() -> None:
    """Main function - starts the MCP server."""
    # Configure logging here to avoid side effects on import; stdout is the
    # stdio transport, so logs go to stderr
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    parser = argparse.ArgumentParser(
        description="mechanic-mcp - MCP server for Mechanic docs and tasks"
    )
    parser.add_argument(
        "--build-data",
        metavar="DIR",
        help="Build a records bundle into DIR and exit",
    )
    parser.add_argument(
        "--no-sync",
        action="store_true",
        help="Do not pull source repositories on startup",
    )
    args = parser.parse_args()

    config = get_config()

    if args.build_data:
        count = build_data(config, Path(args.build_data))
        logger.info("Built bundle with %d records", count)
        return

    logger.info("=" * 50)
    logger.info("mechanic-mcp starting...")
    logger.info("  DOCS:      %s", config.docs.local_path)
    logger.info("  TASKS:     %s", config.tasks.local_path)
    logger.info("  DATA:      %s", config.data_dir)
    logger.info("  SYNC:      %s", f"{config.sync_minutes}m" if config.sync_minutes else "disabled")
    logger.info("  TRANSPORT: %s", config.transport)
    logger.info("=" * 50)

    manifest = read_manifest(config.data_dir)
    if manifest:
        logger.info("Data manifest: %s", manifest)

    sync_manager: SyncManager | None = None
    try:
        store = DataStore(config)
        store.initialize(sync=not args.no_sync)

        if store.bundled:
            logger.info("Serving bundled records, background sync disabled")
        elif config.sync_minutes:
            sync_manager = SyncManager(store, config.sync_minutes * 60)
            sync_manager.start()

        mcp = create_server(config, store)
        if config.transport == "sse":
            logger.info("Starting MCP server on port %s...", config.port)
            mcp.run(transport="sse", host="0.0.0.0", port=config.port)
        else:
            mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception:
        logger.exception("Server error")
        sys.exit(1)
    finally:
        if sync_manager is not None:
            sync_manager.stop()


if __name__ == "__main__":
    main()
