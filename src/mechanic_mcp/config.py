"""Configuration module for mechanic-mcp.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path

DOCS_BASE_URL = "https://learn.mechanic.dev"
TASKS_BASE_URL = "https://tasks.mechanic.dev"


@dataclass
class RepoConfig:
    """Source repository for docs or tasks."""

    local_path: Path
    url: str | None = None
    branch: str = "main"


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name, str(default))
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Invalid {name} value '{value}': {e}") from e


def _path_env(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if not value:
        return default
    return Path(value).expanduser().resolve()


@dataclass
class Config:
    """Application configuration."""

    docs: RepoConfig
    tasks: RepoConfig
    data_dir: Path
    sync_minutes: int
    max_docs: int
    transport: str
    port: int
    docs_base_url: str = DOCS_BASE_URL
    tasks_base_url: str = TASKS_BASE_URL

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        cwd = Path.cwd()

        docs = RepoConfig(
            local_path=_path_env("MECHANIC_DOCS_PATH", cwd / "mechanic-docs"),
            url=os.getenv("MECHANIC_DOCS_REPO_URL") or None,
            branch=os.getenv("MECHANIC_DOCS_BRANCH", "main"),
        )
        tasks = RepoConfig(
            local_path=_path_env("MECHANIC_TASKS_PATH", cwd / "mechanic-tasks"),
            url=os.getenv("MECHANIC_TASKS_REPO_URL") or None,
            branch=os.getenv("MECHANIC_TASKS_BRANCH", "main"),
        )
        data_dir = _path_env("MECHANIC_DATA_PATH", cwd / "dist" / "data")

        # 0 disables background sync
        sync_minutes = _int_env("MECHANIC_SYNC_MINUTES", 30)
        if sync_minutes < 0:
            raise ValueError(f"Sync interval must be >= 0, got {sync_minutes}")

        max_docs = _int_env("MECHANIC_INDEX_MAX_DOCS", 20000)
        if max_docs < 1:
            raise ValueError(f"MECHANIC_INDEX_MAX_DOCS must be >= 1, got {max_docs}")

        transport = os.getenv("MECHANIC_TRANSPORT", "stdio").lower()
        if transport not in ("stdio", "sse"):
            raise ValueError(f"MECHANIC_TRANSPORT must be 'stdio' or 'sse', got '{transport}'")

        port = _int_env("MECHANIC_PORT", 8080)
        if not 1 <= port <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {port}")

        return cls(
            docs=docs,
            tasks=tasks,
            data_dir=data_dir,
            sync_minutes=sync_minutes,
            max_docs=max_docs,
            transport=transport,
            port=port,
        )


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
