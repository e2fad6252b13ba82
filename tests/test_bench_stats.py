"""Tests for revbench.bench.stats — integer summary statistics."""

from __future__ import annotations

import random
import unittest

from revbench.bench.stats import SampleStats, average, best, median, worst


class TestKnownValues(unittest.TestCase):
    def test_median_single(self) -> None:
        self.assertEqual(median([5]), 5)

    def test_median_even_truncates(self) -> None:
        self.assertEqual(median([1, 2, 3, 4]), 2)

    def test_median_odd_unsorted(self) -> None:
        self.assertEqual(median([9, 1, 5]), 5)

    def test_median_does_not_mutate_input(self) -> None:
        samples = [3, 1, 2]
        median(samples)
        self.assertEqual(samples, [3, 1, 2])

    def test_average_truncates(self) -> None:
        self.assertEqual(average([1, 2, 4]), 2)

    def test_best_and_worst(self) -> None:
        self.assertEqual(best([7, 3, 9]), 3)
        self.assertEqual(worst([7, 3, 9]), 9)

    def test_empty_defaults_to_zero(self) -> None:
        self.assertEqual(best([]), 0)
        self.assertEqual(worst([]), 0)
        self.assertEqual(median([]), 0)
        self.assertEqual(average([]), 0)


class TestOrderingInvariants(unittest.TestCase):
    def test_best_le_median_and_average_le_worst(self) -> None:
        rng = random.Random(1234)
        for _ in range(200):
            samples = [rng.randint(0, 10**9) for _ in range(rng.randint(1, 30))]
            with self.subTest(samples=samples):
                s = SampleStats.from_samples(samples)
                self.assertLessEqual(s.best, s.median)
                self.assertLessEqual(s.median, s.worst)
                self.assertLessEqual(s.best, s.average)
                self.assertLessEqual(s.average, s.worst)


class TestSampleStats(unittest.TestCase):
    def test_from_samples(self) -> None:
        s = SampleStats.from_samples([10, 20, 30, 41])
        self.assertEqual(s.count, 4)
        self.assertEqual(s.best, 10)
        self.assertEqual(s.worst, 41)
        self.assertEqual(s.median, 25)
        self.assertEqual(s.average, 25)

    def test_to_dict(self) -> None:
        d = SampleStats.from_samples([1, 2, 4]).to_dict()
        self.assertEqual(d, {"count": 3, "best": 1, "worst": 4, "median": 2, "average": 2})


if __name__ == "__main__":
    unittest.main()
