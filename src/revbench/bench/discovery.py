"""Locate the benchmark workloads to run against each artifact."""

from __future__ import annotations

from pathlib import Path

from revbench.logging import get_logger

log = get_logger("discovery")


def discover_workloads(directory: Path, suffix: str = ".js") -> list[Path]:
    """List workload files directly inside *directory*.

    Only regular files ending in *suffix* are returned; subdirectories
    are not searched. The list is sorted by file name so that every
    run iterates workloads in the same order.

    Raises:
        FileNotFoundError: If *directory* does not exist or is not a
            directory.
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Benchmarks directory not found: {directory}")

    workloads = [p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffix)]
    workloads.sort(key=lambda p: p.name)
    log.debug("Discovered %d workload(s) in %s", len(workloads), directory)
    return workloads
