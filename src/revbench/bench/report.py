"""Group benchmark results into a per-revision report and render it.

The report is keyed the same way on every run regardless of the order
revisions were benchmarked in: revisions sort lexically, and each
revision's rows follow the sorted set of workload names seen across
*all* revisions. A workload that failed for one revision simply has
no row in that revision's section.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from revbench.bench.results import BenchmarkResult
from revbench.bench.stats import SampleStats
from revbench.formatting import (
    format_markdown_table,
    format_section_header,
    format_table,
    format_thousands,
)

NO_RESULTS_MESSAGE = "No benchmark results."

_HEADERS = ["Benchmark", "Best", "Worst", "Median", "Average"]
_ALIGNMENTS = ["l", "r", "r", "r", "r"]


# ---------------------------------------------------------------------------
# Report structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReportRow:
    """Statistics for one workload under one revision."""

    workload: str
    stats: SampleStats


@dataclass
class RevisionSection:
    """All rows reported for one revision."""

    revision: str
    rows: list[ReportRow] = field(default_factory=list)


@dataclass
class Report:
    """A grouped, sorted view of a run's results."""

    sections: list[RevisionSection] = field(default_factory=list)
    workloads: list[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.sections


def build_report(results: Iterable[BenchmarkResult]) -> Report:
    """Group *results* by revision and workload.

    Raises:
        ValueError: If two results share a (revision, workload) pair.
    """
    grouped: dict[str, dict[str, BenchmarkResult]] = {}
    for result in results:
        by_workload = grouped.setdefault(result.revision, {})
        if result.workload in by_workload:
            raise ValueError(
                f"Duplicate result for revision {result.revision!r}, "
                f"workload {result.workload!r}"
            )
        by_workload[result.workload] = result

    universe = sorted({wl for by_workload in grouped.values() for wl in by_workload})

    report = Report(workloads=universe)
    for revision in sorted(grouped):
        by_workload = grouped[revision]
        section = RevisionSection(revision=revision)
        for workload in universe:
            result = by_workload.get(workload)
            if result is None:
                continue
            section.rows.append(ReportRow(workload=workload, stats=result.stats))
        report.sections.append(section)
    return report


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _row_cells(row: ReportRow) -> list[str]:
    s = row.stats
    return [
        row.workload,
        format_thousands(s.best),
        format_thousands(s.worst),
        format_thousands(s.median),
        format_thousands(s.average),
    ]


def format_report_text(report: Report) -> str:
    """Render *report* as aligned plain-text tables, one per revision."""
    if report.empty:
        return NO_RESULTS_MESSAGE

    blocks: list[str] = []
    for section in report.sections:
        table = format_table(
            _HEADERS,
            [_row_cells(row) for row in section.rows],
            alignments=_ALIGNMENTS,
        )
        blocks.append(format_section_header(f"Revision {section.revision}") + "\n" + table)
    return "\n\n".join(blocks)


def format_report_markdown(report: Report) -> str:
    """Render *report* as markdown, one heading and table per revision."""
    if report.empty:
        return NO_RESULTS_MESSAGE

    blocks: list[str] = []
    for section in report.sections:
        table = format_markdown_table(
            _HEADERS,
            [_row_cells(row) for row in section.rows],
            alignments=_ALIGNMENTS,
        )
        blocks.append(f"### {section.revision}\n\n{table}")
    return "\n\n".join(blocks)


def report_to_dict(report: Report) -> dict[str, Any]:
    """Serialize *report* for JSON output. Numbers are left unformatted."""
    return {
        "workloads": list(report.workloads),
        "revisions": [
            {
                "revision": section.revision,
                "results": [
                    {"workload": row.workload, **row.stats.to_dict()} for row in section.rows
                ],
            }
            for section in report.sections
        ],
    }
