"""Git sync for the docs and tasks source repositories."""

import logging
import subprocess
from pathlib import Path

from mechanic_mcp.config import RepoConfig

logger = logging.getLogger(__name__)


class GitSyncError(RuntimeError):
    """Raised when a git command fails."""


def _run_git(args: list[str], cwd: Path | None = None) -> None:
    try:
        subprocess.run(
            ["git", *args],
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        stderr = getattr(e, "stderr", "") or ""
        raise GitSyncError(f"git {' '.join(args)} failed: {stderr.strip() or e}") from e


def sync_repo(repo: RepoConfig) -> bool:
    """
    Bring a local checkout in line with its remote branch.

    Clones first if the local path is not a git checkout. Repos without a
    URL are assumed to be local-only and are left alone.

    Returns:
        True if a sync was performed.

    Raises:
        GitSyncError: If any git command fails.
    """
    if not repo.url:
        logger.debug("No remote for %s, skipping sync", repo.local_path)
        return False

    if not (repo.local_path / ".git").exists():
        logger.info("Cloning %s (%s) into %s", repo.url, repo.branch, repo.local_path)
        repo.local_path.mkdir(parents=True, exist_ok=True)
        _run_git(["clone", "--branch", repo.branch, repo.url, str(repo.local_path)])

    _run_git(["fetch", "--prune"], cwd=repo.local_path)
    _run_git(["checkout", repo.branch], cwd=repo.local_path)
    _run_git(["reset", "--hard", f"origin/{repo.branch}"], cwd=repo.local_path)
    logger.info("Synced %s to origin/%s", repo.local_path, repo.branch)
    return True
