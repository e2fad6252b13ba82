"""Tests for revbench.bench.report — grouping and rendering."""

from __future__ import annotations

import unittest

from bench_test_helpers import make_result

from revbench.bench.report import (
    NO_RESULTS_MESSAGE,
    build_report,
    format_report_markdown,
    format_report_text,
    report_to_dict,
)


class TestBuildReport(unittest.TestCase):
    def test_sorted_regardless_of_input_order(self) -> None:
        results = [
            make_result("b", "w2.js", [1]),
            make_result("b", "w1.js", [1]),
            make_result("a", "w2.js", [1]),
            make_result("a", "w1.js", [1]),
        ]
        report = build_report(results)
        self.assertEqual([s.revision for s in report.sections], ["a", "b"])
        for section in report.sections:
            self.assertEqual([r.workload for r in section.rows], ["w1.js", "w2.js"])

    def test_universe_spans_all_revisions(self) -> None:
        report = build_report(
            [make_result("a", "w1.js", [1]), make_result("b", "w2.js", [1])]
        )
        self.assertEqual(report.workloads, ["w1.js", "w2.js"])
        self.assertEqual([r.workload for r in report.sections[0].rows], ["w1.js"])
        self.assertEqual([r.workload for r in report.sections[1].rows], ["w2.js"])

    def test_row_statistics(self) -> None:
        report = build_report([make_result("a", "w.js", [1, 2, 3, 4])])
        stats = report.sections[0].rows[0].stats
        self.assertEqual((stats.best, stats.worst, stats.median, stats.average), (1, 4, 2, 2))

    def test_duplicate_pair_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_report([make_result("a", "w.js", [1]), make_result("a", "w.js", [2])])

    def test_empty(self) -> None:
        report = build_report([])
        self.assertTrue(report.empty)
        self.assertEqual(report.workloads, [])


class TestFormatText(unittest.TestCase):
    def test_empty_report_message(self) -> None:
        self.assertEqual(format_report_text(build_report([])), NO_RESULTS_MESSAGE)

    def test_thousands_separators_and_columns(self) -> None:
        text = format_report_text(build_report([make_result("abc", "maps.js", [1234567, 1000])]))
        self.assertIn("Revision abc", text)
        for header in ["Benchmark", "Best", "Worst", "Median", "Average"]:
            self.assertIn(header, text)
        self.assertIn("1,234,567", text)
        self.assertIn("1,000", text)
        self.assertIn("617,783", text)  # median and average of the two samples

    def test_revision_order_in_output(self) -> None:
        text = format_report_text(
            build_report([make_result("b", "w.js", [1]), make_result("a", "w.js", [1])])
        )
        self.assertLess(text.index("Revision a"), text.index("Revision b"))

    def test_deterministic(self) -> None:
        results = [make_result("b", "w2.js", [5, 7]), make_result("a", "w1.js", [3])]
        self.assertEqual(
            format_report_text(build_report(results)),
            format_report_text(build_report(list(reversed(results)))),
        )


class TestFormatMarkdown(unittest.TestCase):
    def test_markdown_table(self) -> None:
        md = format_report_markdown(build_report([make_result("a", "w.js", [2000])]))
        self.assertIn("### a", md)
        self.assertIn("| Benchmark | Best | Worst | Median | Average |", md)
        self.assertIn("| --- | ---: | ---: | ---: | ---: |", md)
        self.assertIn("| w.js | 2,000 | 2,000 | 2,000 | 2,000 |", md)

    def test_empty(self) -> None:
        self.assertEqual(format_report_markdown(build_report([])), NO_RESULTS_MESSAGE)


class TestReportToDict(unittest.TestCase):
    def test_raw_integers(self) -> None:
        data = report_to_dict(build_report([make_result("a", "w.js", [1000, 3000])]))
        self.assertEqual(data["workloads"], ["w.js"])
        row = data["revisions"][0]["results"][0]
        self.assertEqual(row["workload"], "w.js")
        self.assertEqual(row["median"], 2000)
        self.assertEqual(row["count"], 2)

    def test_empty(self) -> None:
        self.assertEqual(report_to_dict(build_report([])), {"workloads": [], "revisions": []})


if __name__ == "__main__":
    unittest.main()
