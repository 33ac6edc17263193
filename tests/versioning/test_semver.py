import unittest

from figma_changelog.versioning.semver import VersionTriple, next_version, read_current_version


class TestVersionTriple(unittest.TestCase):
    def test_parse(self):
        cases = [
            ("1.2.3", VersionTriple(1, 2, 3)),
            (" 10.0.7 ", VersionTriple(10, 0, 7)),
            ("", VersionTriple(0, 0, 0)),
            (None, VersionTriple(0, 0, 0)),
            ("1.2", VersionTriple(0, 0, 0)),
            ("v1.2.3", VersionTriple(0, 0, 0)),
            ("1.2.3-beta", VersionTriple(0, 0, 0)),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                self.assertEqual(VersionTriple.parse(text), expected)

    def test_str(self):
        self.assertEqual(str(VersionTriple(0, 4, 10)), "0.4.10")


class TestReadCurrentVersion(unittest.TestCase):
    def test_first_heading_wins(self):
        changelog = "# Changelog\n\n## 1.2.3 - 2026-01-01\n\n- a\n\n## 1.2.2 - 2025-12-01\n"
        self.assertEqual(read_current_version(changelog), VersionTriple(1, 2, 3))

    def test_heading_must_start_a_line(self):
        changelog = "# Changelog\nsee ## 9.9.9 below\n"
        self.assertEqual(read_current_version(changelog), VersionTriple(0, 0, 0))

    def test_no_heading(self):
        self.assertEqual(read_current_version("# Changelog\n"), VersionTriple(0, 0, 0))
        self.assertEqual(read_current_version(""), VersionTriple(0, 0, 0))


class TestNextVersion(unittest.TestCase):
    def test_stable_series(self):
        previous = VersionTriple(1, 2, 3)
        cases = [
            (True, True, VersionTriple(2, 0, 0)),
            (False, True, VersionTriple(2, 0, 0)),
            (True, False, VersionTriple(1, 3, 0)),
            (False, False, VersionTriple(1, 2, 4)),
        ]
        for has_added, has_deleted, expected in cases:
            with self.subTest(has_added=has_added, has_deleted=has_deleted):
                self.assertEqual(next_version(previous, has_added, has_deleted), expected)

    def test_deletions_always_bump_major(self):
        for previous in (VersionTriple(1, 0, 0), VersionTriple(3, 7, 9), VersionTriple(12, 1, 0)):
            for has_added in (True, False):
                with self.subTest(previous=str(previous), has_added=has_added):
                    bumped = next_version(previous, has_added, True)
                    self.assertEqual(bumped, VersionTriple(previous.major + 1, 0, 0))

    def test_pre_release_series_flattens_bumps(self):
        previous = VersionTriple(0, 4, 9)
        expected = VersionTriple(0, 5, 0)
        for has_added, has_deleted in ((True, False), (False, True), (True, True)):
            with self.subTest(has_added=has_added, has_deleted=has_deleted):
                self.assertEqual(next_version(previous, has_added, has_deleted), expected)

    def test_no_additions_or_deletions_bump_patch(self):
        for previous in (VersionTriple(0, 4, 9), VersionTriple(0, 0, 0), VersionTriple(2, 5, 1)):
            with self.subTest(previous=str(previous)):
                bumped = next_version(previous, False, False)
                self.assertEqual(
                    bumped, VersionTriple(previous.major, previous.minor, previous.patch + 1)
                )


if __name__ == "__main__":
    unittest.main()
