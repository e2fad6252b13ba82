"""Tests for revbench.bench.cache — revision-keyed artifact cache."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from bench_test_helpers import FakeBuilder

from revbench.bench.cache import ArtifactCache
from revbench.bench.errors import BuildError


class CacheTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.build_dir = Path(self._tmp.name) / "builds"
        self.builder = FakeBuilder()
        self.cache = ArtifactCache(self.build_dir, self.builder, prefix="nova-")

    def tearDown(self) -> None:
        self._tmp.cleanup()


class TestPathFor(CacheTestCase):
    def test_path_convention(self) -> None:
        self.assertEqual(self.cache.path_for("abc123"), self.build_dir / "nova-abc123")

    def test_no_normalization(self) -> None:
        self.assertNotEqual(self.cache.path_for("abc"), self.cache.path_for("abc123"))


class TestResolve(CacheTestCase):
    def test_existing_artifact_is_never_rebuilt(self) -> None:
        self.build_dir.mkdir()
        (self.build_dir / "nova-abc").write_text("bin")
        with self.assertLogs("revbench.cache", level="INFO") as cm:
            artifact = self.cache.resolve("abc")
        self.assertEqual(self.builder.calls, [])
        self.assertFalse(artifact.built)
        self.assertEqual(artifact.path, self.build_dir / "nova-abc")
        self.assertTrue(any("skipping build" in m for m in cm.output))

    def test_missing_artifact_is_built(self) -> None:
        artifact = self.cache.resolve("abc")
        self.assertEqual(self.builder.built_revisions, ["abc"])
        self.assertEqual(self.builder.calls[0][1], self.build_dir / "nova-abc")
        self.assertTrue(artifact.built)
        self.assertTrue(artifact.path.exists())

    def test_build_dir_created(self) -> None:
        self.assertFalse(self.build_dir.exists())
        self.cache.resolve("abc")
        self.assertTrue(self.build_dir.is_dir())

    def test_second_resolve_uses_cache(self) -> None:
        first = self.cache.resolve("abc")
        second = self.cache.resolve("abc")
        self.assertEqual(self.builder.built_revisions, ["abc"])
        self.assertIs(first, second)

    def test_builder_failure_propagates(self) -> None:
        self.builder.fail_on.add("bad")
        with self.assertRaises(BuildError):
            self.cache.resolve("bad")

    def test_builder_leaving_no_file_is_an_error(self) -> None:
        cache = ArtifactCache(self.build_dir, FakeBuilder(write=False))
        with self.assertRaises(BuildError):
            cache.resolve("abc")


    def test_directory_at_artifact_path_is_not_a_hit(self) -> None:
        self.cache.resolve("release/1.0")
        self.assertTrue(self.cache.path_for("release").is_dir())
        self.assertIsNone(self.cache.lookup("release"))
        with self.assertRaises(BuildError) as cm:
            self.cache.resolve("release")
        self.assertIn("not a file", str(cm.exception))
        self.assertEqual(self.builder.built_revisions, ["release/1.0"])

    def test_builder_leaving_directory_is_an_error(self) -> None:
        class DirBuilder(FakeBuilder):
            def build(self, revision: str, dest: Path) -> None:
                dest.mkdir(parents=True)

        with self.assertRaises(BuildError):
            ArtifactCache(self.build_dir, DirBuilder()).resolve("abc")


class TestLookupAndListing(CacheTestCase):
    def test_lookup_does_not_build(self) -> None:
        self.assertIsNone(self.cache.lookup("abc"))
        self.assertEqual(self.builder.calls, [])

    def test_artifacts_listing(self) -> None:
        self.build_dir.mkdir()
        (self.build_dir / "nova-b").write_text("")
        (self.build_dir / "nova-a").write_text("")
        (self.build_dir / "unrelated").write_text("")
        (self.build_dir / "nova-").write_text("")
        self.assertEqual([a.revision for a in self.cache.artifacts()], ["a", "b"])

    def test_artifacts_missing_dir(self) -> None:
        self.assertEqual(self.cache.artifacts(), [])


if __name__ == "__main__":
    unittest.main()
