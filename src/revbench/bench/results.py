"""Benchmark result data structures.

Hierarchy::

    ResultSet (one run)
      → results: BenchmarkResult per (revision, workload) pair
      → skipped: SkippedRun per pair that produced nothing usable

Results only live for the duration of a run; nothing here is written
to disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from revbench.bench.stats import SampleStats


@dataclass(frozen=True)
class BenchmarkResult:
    """All samples from running one revision's artifact on one workload."""

    workload: str
    revision: str
    samples: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.samples:
            raise ValueError(
                f"BenchmarkResult for {self.revision}/{self.workload} has no samples"
            )
        # Accept any sequence but always store a tuple.
        object.__setattr__(self, "samples", tuple(self.samples))

    @property
    def stats(self) -> SampleStats:
        """Summary statistics, recomputed on each access."""
        return SampleStats.from_samples(self.samples)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "workload": self.workload,
            "revision": self.revision,
            "samples": list(self.samples),
        }


@dataclass(frozen=True)
class SkippedRun:
    """A (revision, workload) pair that produced no result, and why."""

    revision: str
    workload: str
    reason: str


@dataclass
class ResultSet:
    """Every result collected during one run.

    At most one result is kept per (revision, workload) pair.
    """

    _results: dict[tuple[str, str], BenchmarkResult] = field(default_factory=dict)
    skipped: list[SkippedRun] = field(default_factory=list)

    def add(self, result: BenchmarkResult) -> None:
        """Record *result*.

        Raises:
            ValueError: If a result for the same pair was already added.
        """
        key = (result.revision, result.workload)
        if key in self._results:
            raise ValueError(
                f"Duplicate result for revision {result.revision!r}, "
                f"workload {result.workload!r}"
            )
        self._results[key] = result

    def skip(self, revision: str, workload: str, reason: str) -> None:
        """Note that a pair was skipped."""
        self.skipped.append(SkippedRun(revision=revision, workload=workload, reason=reason))

    def get(self, revision: str, workload: str) -> BenchmarkResult | None:
        """Return the result for a pair, or None if it has none."""
        return self._results.get((revision, workload))

    def revisions(self) -> list[str]:
        """Revisions that have at least one result, in lexical order."""
        return sorted({rev for rev, _ in self._results})

    def workloads(self) -> list[str]:
        """Workload names seen for any revision, in lexical order."""
        return sorted({wl for _, wl in self._results})

    def __iter__(self) -> Iterator[BenchmarkResult]:
        return iter(self._results.values())

    def __len__(self) -> int:
        return len(self._results)
