"""Shared fixtures: a small docs/tasks corpus on disk and a store built from it."""

from pathlib import Path

import pytest

from mechanic_mcp.config import Config, RepoConfig
from mechanic_mcp.store import DataStore


@pytest.fixture
def fixtures_root() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def config(fixtures_root: Path, tmp_path: Path) -> Config:
    """Config pointing at the fixture corpus, with no remotes."""
    return Config(
        docs=RepoConfig(local_path=fixtures_root / "mechanic-docs"),
        tasks=RepoConfig(local_path=fixtures_root / "mechanic-tasks"),
        data_dir=tmp_path / "data",
        sync_minutes=0,
        max_docs=20000,
        transport="stdio",
        port=8080,
    )


@pytest.fixture
def store(config: Config) -> DataStore:
    """Store initialized from the fixture corpus."""
    data_store = DataStore(config)
    data_store.initialize(sync=False)
    return data_store
