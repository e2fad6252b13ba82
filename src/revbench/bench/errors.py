"""Fatal errors raised by the benchmarking pipeline.

Anything raised from here aborts the whole run: without a checkout,
an artifact, or a launchable process no further benchmarking of that
revision means anything. Failures that only affect one
(revision, workload) pair are logged and skipped instead.
"""

from __future__ import annotations


class BenchError(Exception):
    """Base class for fatal benchmarking errors."""


class RepositoryError(BenchError):
    """The source checkout could not be cloned, fetched or checked out."""


class BuildError(BenchError):
    """No artifact could be produced for a revision."""


class LaunchError(BenchError):
    """A benchmark process could not be started at all."""
