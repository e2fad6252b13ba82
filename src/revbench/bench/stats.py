"""Summary statistics for timing samples.

All values are integers: the median of an even-sized sample and the
average are truncated rather than rounded, so a report never shows
more precision than the samples themselves carry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


def best(samples: Sequence[int]) -> int:
    """Smallest sample, or 0 for an empty sequence."""
    return min(samples, default=0)


def worst(samples: Sequence[int]) -> int:
    """Largest sample, or 0 for an empty sequence."""
    return max(samples, default=0)


def median(samples: Sequence[int]) -> int:
    """Middle sample of a sorted copy.

    For an even count this is the truncated mean of the two middle
    samples, so ``median([1, 2, 3, 4]) == 2``.
    """
    if not samples:
        return 0
    ordered = sorted(samples)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) // 2


def average(samples: Sequence[int]) -> int:
    """Truncated arithmetic mean, so ``average([1, 2, 4]) == 2``."""
    if not samples:
        return 0
    return sum(samples) // len(samples)


@dataclass(frozen=True)
class SampleStats:
    """The four summary values shown for one (revision, workload) pair."""

    count: int
    best: int
    worst: int
    median: int
    average: int

    @classmethod
    def from_samples(cls, samples: Sequence[int]) -> SampleStats:
        """Compute all statistics for *samples*."""
        return cls(
            count=len(samples),
            best=best(samples),
            worst=worst(samples),
            median=median(samples),
            average=average(samples),
        )

    def to_dict(self) -> dict[str, int]:
        """Serialize to a JSON-compatible dict."""
        return {
            "count": self.count,
            "best": self.best,
            "worst": self.worst,
            "median": self.median,
            "average": self.average,
        }
