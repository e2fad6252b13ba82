"""Parse timing samples out of a benchmark's standard output.

Artifacts print one non-negative integer per line for every timing
sample. They may interleave log lines or other chatter; anything that
is not a bare base-10 integer is dropped without complaint.
"""

from __future__ import annotations

import re

_SAMPLE_RE = re.compile(r"[0-9]+")


def parse_sample(line: str) -> int | None:
    """Return the sample on *line*, or None if it is not one.

    Surrounding whitespace is ignored. Signs, digit separators,
    decimals and non-ASCII digits are rejected.
    """
    text = line.strip()
    if _SAMPLE_RE.fullmatch(text) is None:
        return None
    return int(text)


def parse_samples(output: str) -> list[int]:
    """Return every sample in *output*, in the order printed."""
    samples: list[int] = []
    for line in output.splitlines():
        value = parse_sample(line)
        if value is not None:
            samples.append(value)
    return samples
