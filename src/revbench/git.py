"""Git operations on the checkout that artifacts are built from."""

from __future__ import annotations

import subprocess
from pathlib import Path

from revbench.bench.errors import RepositoryError
from revbench.logging import get_logger

log = get_logger("git")


def _git(args: list[str], *, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Run a git command, raising RepositoryError on any failure."""
    cmd = ["git", *args]
    log.debug("Running: %s (cwd=%s)", " ".join(cmd), cwd or ".")
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(cwd) if cwd else None,
            check=False,
        )
    except OSError as exc:
        raise RepositoryError(f"Could not run git: {exc}") from exc
    if proc.returncode != 0:
        detail = proc.stderr.strip()[:500]
        raise RepositoryError(f"git {args[0]} failed ({proc.returncode}): {detail}")
    return proc


def ensure_clone(repo_url: str, repo_dir: Path) -> None:
    """Clone *repo_url* into *repo_dir* unless the directory already exists."""
    if repo_dir.exists():
        return
    log.info("Cloning repository %s into %s...", repo_url, repo_dir)
    _git(["clone", repo_url, str(repo_dir)])


def fetch(repo_dir: Path, remote: str = "origin") -> None:
    """Fetch the latest changes from *remote*."""
    log.info("Fetching latest changes...")
    _git(["fetch", remote], cwd=repo_dir)


def checkout(repo_dir: Path, revision: str) -> None:
    """Check out *revision* in *repo_dir*."""
    log.info("Checking out revision: %s", revision)
    # "--" keeps a revision such as "-f" from being read as an option.
    _git(["checkout", "--force", revision, "--"], cwd=repo_dir)
