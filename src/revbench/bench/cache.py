"""Artifact cache keyed by revision identifier.

An artifact for revision ``R`` lives at ``<build_dir>/<prefix>R``. If
that file exists it is trusted as-is: there is no hashing and no
staleness check, and nothing here ever deletes an artifact. The
revision string is used verbatim, so two spellings of the same commit
(short and full hash) are two separate entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from revbench.bench.build import Builder
from revbench.bench.errors import BuildError
from revbench.logging import get_logger

log = get_logger("cache")


@dataclass(frozen=True)
class Artifact:
    """An executable built from one revision."""

    revision: str
    path: Path
    built: bool = False  # True if produced during this run


class ArtifactCache:
    """Maps revisions to artifacts, building the ones that are missing."""

    def __init__(self, build_dir: Path, builder: Builder, prefix: str = "nova-") -> None:
        self.build_dir = build_dir
        self.builder = builder
        self.prefix = prefix
        self._artifacts: dict[str, Artifact] = {}

    def path_for(self, revision: str) -> Path:
        """Where the artifact for *revision* lives, whether or not it exists."""
        return self.build_dir / f"{self.prefix}{revision}"

    def lookup(self, revision: str) -> Artifact | None:
        """Return the artifact for *revision* if one exists, without building."""
        known = self._artifacts.get(revision)
        if known is not None:
            return known
        path = self.path_for(revision)
        if path.is_file():
            artifact = Artifact(revision=revision, path=path)
            self._artifacts[revision] = artifact
            return artifact
        return None

    def resolve(self, revision: str) -> Artifact:
        """Return the artifact for *revision*, building it if necessary.

        Raises:
            BuildError: If the builder fails or leaves no file behind, or if
                something other than a file occupies the artifact path.
            RepositoryError: If the builder cannot prepare the source.
        """
        cached = self.lookup(revision)
        if cached is not None:
            log.info("Build artifact for revision %s already exists, skipping build.", revision)
            return cached

        path = self.path_for(revision)
        if path.exists():
            # e.g. "nova-release/" left behind by a build of "release/1.0".
            raise BuildError(f"Artifact path for revision {revision} is not a file: {path}")
        if not self.build_dir.exists():
            log.info("Creating build directory %s", self.build_dir)
        self.build_dir.mkdir(parents=True, exist_ok=True)

        self.builder.build(revision, path)
        if not path.is_file():
            raise BuildError(f"Build of revision {revision} produced no artifact at {path}")

        artifact = Artifact(revision=revision, path=path, built=True)
        self._artifacts[revision] = artifact
        return artifact

    def artifacts(self) -> list[Artifact]:
        """Artifacts currently present in the build directory, by revision."""
        if not self.build_dir.is_dir():
            return []
        found = [
            Artifact(revision=p.name[len(self.prefix) :], path=p)
            for p in self.build_dir.iterdir()
            if p.is_file() and p.name.startswith(self.prefix) and len(p.name) > len(self.prefix)
        ]
        found.sort(key=lambda a: a.revision)
        return found
