"""Build an artifact for a single revision.

The default builder checks the revision out of a local git clone,
runs the project's build command and copies the produced binary to
the artifact path the cache asked for.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from revbench import git
from revbench.bench.errors import BuildError
from revbench.config import RunConfig
from revbench.logging import get_logger

log = get_logger("build")


class Builder(Protocol):
    """Anything that can turn a revision into an executable file."""

    def build(self, revision: str, dest: Path) -> None:
        """Build *revision* and place the executable at *dest*.

        Raises:
            BuildError: If no executable could be produced.
            RepositoryError: If the source could not be prepared.
        """
        ...


class CargoBuilder:
    """Build revisions of a cargo project from a local git checkout.

    The checkout is cloned and fetched lazily, on the first build, so
    a run whose revisions are all cached never touches the network.
    """

    def __init__(self, config: RunConfig) -> None:
        self.config = config
        self._prepared = False

    def prepare(self) -> None:
        """Clone the repository if needed and fetch from origin."""
        if self._prepared:
            return
        git.ensure_clone(self.config.repo_url, self.config.repo_dir)
        if self.config.fetch:
            git.fetch(self.config.repo_dir)
        self._prepared = True

    def build(self, revision: str, dest: Path) -> None:
        self.prepare()
        repo_dir = self.config.repo_dir
        git.checkout(repo_dir, revision)

        cmd = list(self.config.build_command)
        log.info("Building revision: %s", revision)
        log.debug("Running: %s (cwd=%s)", " ".join(cmd), repo_dir)
        try:
            # Build output is passed straight through so long builds show progress.
            proc = subprocess.run(cmd, cwd=str(repo_dir), check=False)
        except OSError as exc:
            raise BuildError(f"Could not run build command {cmd[0]!r}: {exc}") from exc
        if proc.returncode != 0:
            raise BuildError(
                f"Build of revision {revision} failed with exit status {proc.returncode}"
            )

        built = repo_dir / self.config.built_binary
        log.info("Copying build artifact to: %s", dest)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(built, dest)
        except OSError as exc:
            raise BuildError(f"Could not copy {built} to {dest}: {exc}") from exc
