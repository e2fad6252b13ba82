"""Run one artifact against one workload.

Runs are synchronous and have no timeout: a workload that never exits
blocks the run until it is interrupted.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from revbench.bench.cache import Artifact
from revbench.bench.errors import LaunchError
from revbench.logging import get_logger

log = get_logger("executor")


@dataclass(frozen=True)
class RawOutput:
    """What a finished benchmark process left behind."""

    exit_code: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class Executor(Protocol):
    """Anything that can run a workload on an artifact."""

    def run(self, artifact: Artifact, workload: Path) -> RawOutput:
        """Run *workload* with *artifact* to completion.

        Raises:
            LaunchError: If the process could not be started.
        """
        ...


class SubprocessExecutor:
    """Invoke ``<artifact> <verb> <workload>`` as a child process."""

    def __init__(self, verb: str = "eval") -> None:
        self.verb = verb

    def command(self, artifact: Artifact, workload: Path) -> list[str]:
        return [str(artifact.path.absolute()), self.verb, str(workload)]

    def run(self, artifact: Artifact, workload: Path) -> RawOutput:
        log.info("  Running benchmark %s (revision %s)", workload.name, artifact.revision)
        cmd = self.command(artifact, workload)
        log.debug("Running: %s", " ".join(cmd))
        try:
            # Stray non-UTF-8 chatter must not stop the samples from being parsed.
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise LaunchError(f"Could not launch {artifact.path}: {exc}") from exc
        if proc.stderr:
            log.debug("stderr from %s:\n%s", workload.name, proc.stderr.rstrip())
        return RawOutput(exit_code=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
