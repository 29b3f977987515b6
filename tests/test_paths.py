from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from treecopy.paths import (
    base_name,
    compose,
    directory_target,
    file_target,
    fits,
    is_within,
    trim_trailing_separators,
)


class TrimAndBaseNameTests(unittest.TestCase):
    def test_trailing_separators_are_stripped(self) -> None:
        self.assertEqual(trim_trailing_separators("/a/dir/"), "/a/dir")
        self.assertEqual(trim_trailing_separators("/a/dir///"), "/a/dir")
        self.assertEqual(trim_trailing_separators("dir"), "dir")

    def test_root_separator_is_kept(self) -> None:
        self.assertEqual(trim_trailing_separators("/"), "/")

    def test_base_name_ignores_trailing_slash(self) -> None:
        self.assertEqual(base_name("/a/dir/"), "dir")
        self.assertEqual(base_name("/a/file.txt"), "file.txt")
        self.assertEqual(base_name("plain"), "plain")


class ComposeTests(unittest.TestCase):
    def test_compose_joins_within_limit(self) -> None:
        self.assertEqual(compose("src", "child", limit=100), os.path.join("src", "child"))

    def test_compose_rejects_paths_at_limit(self) -> None:
        joined = os.path.join("src", "child")
        self.assertIsNone(compose("src", "child", limit=len(joined)))
        self.assertEqual(compose("src", "child", limit=len(joined) + 1), joined)

    def test_fits_counts_encoded_bytes(self) -> None:
        self.assertTrue(fits("abc", limit=4))
        self.assertFalse(fits("éé", limit=4))


class TargetTests(unittest.TestCase):
    def test_directory_target_uses_source_basename(self) -> None:
        self.assertEqual(directory_target("/a/dir/", "/b"), os.path.join("/b", "dir"))

    def test_directory_target_too_long(self) -> None:
        self.assertIsNone(directory_target("/a/dir", "/b", limit=4))

    def test_file_target_inside_existing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(file_target("/a/file.txt", tmp), os.path.join(tmp, "file.txt"))

    def test_file_target_literal_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            literal = os.path.join(tmp, "renamed.txt")
            self.assertEqual(file_target("/a/file.txt", literal), literal)

    def test_file_target_too_long(self) -> None:
        self.assertIsNone(file_target("/a/file.txt", "/no/such/dir/x", limit=5))


class IsWithinTests(unittest.TestCase):
    def test_nested_and_equal_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "src"
            src.mkdir()

            self.assertTrue(is_within(str(src), str(src)))
            self.assertTrue(is_within(str(src / "sub" / "src"), str(src)))
            self.assertFalse(is_within(str(Path(tmp) / "dst" / "src"), str(src)))
            self.assertFalse(is_within(str(Path(tmp) / "src2"), str(src)))


if __name__ == "__main__":
    unittest.main()
