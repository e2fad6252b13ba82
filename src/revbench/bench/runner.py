"""Benchmark execution engine.

Drives the (revisions x workloads) matrix:

1. For each revision, in the order given: resolve its artifact
   (cache hit, or build).
2. For each workload, in the order given: run it, parse the samples,
   and record a result if there are any.

Building, checkout and launch failures abort the run. A workload that
exits non-zero or prints no samples is logged and skipped; the run
carries on with the next one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from revbench.bench.cache import Artifact, ArtifactCache
from revbench.bench.executor import Executor
from revbench.bench.parse import parse_samples
from revbench.bench.results import BenchmarkResult, ResultSet
from revbench.logging import get_logger

log = get_logger("runner")


class BenchRunner:
    """Runs every workload against every revision's artifact.

    Usage::

        cache = ArtifactCache(Path("nova-builds"), CargoBuilder(config))
        runner = BenchRunner(cache, SubprocessExecutor())
        results = runner.run(["abc123", "def456"], workloads)
    """

    def __init__(self, cache: ArtifactCache, executor: Executor) -> None:
        self.cache = cache
        self.executor = executor

    def run(self, revisions: Sequence[str], workloads: Sequence[Path]) -> ResultSet:
        """Execute the full matrix and return everything that succeeded.

        Raises:
            BuildError, RepositoryError, LaunchError: On fatal failures.
        """
        results = ResultSet()
        # A revision listed twice is benchmarked once, at its first position.
        unique = list(dict.fromkeys(revisions))
        if len(unique) != len(revisions):
            dropped = sorted({rev for rev in revisions if revisions.count(rev) > 1})
            log.warning(
                "Revision(s) listed more than once, benchmarking each once: %s",
                ", ".join(dropped),
            )
        for revision in unique:
            artifact = self.cache.resolve(revision)
            log.info("Running benchmarks for revision %s (%s)", revision, artifact.path)
            for workload in workloads:
                self._run_one(results, revision, workload, artifact)

        log.info(
            "Finished: %d result(s), %d skipped",
            len(results),
            len(results.skipped),
        )
        return results

    def _run_one(
        self, results: ResultSet, revision: str, workload: Path, artifact: Artifact
    ) -> None:
        name = workload.name
        output = self.executor.run(artifact, workload)
        if not output.ok:
            log.warning(
                "Benchmark %s failed for revision %s with exit status %d, skipping",
                name,
                revision,
                output.exit_code,
            )
            results.skip(revision, name, f"exit status {output.exit_code}")
            return

        samples = parse_samples(output.stdout)
        if not samples:
            log.warning(
                "Benchmark %s printed no samples for revision %s, skipping", name, revision
            )
            results.skip(revision, name, "no samples")
            return

        log.debug("%s/%s: %d sample(s)", revision, name, len(samples))
        results.add(BenchmarkResult(workload=name, revision=revision, samples=tuple(samples)))
