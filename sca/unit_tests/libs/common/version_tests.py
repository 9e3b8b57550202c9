import unittest

import semver

from sca.libs.common.version import is_at_least, parse_version


class TestParseVersion(unittest.TestCase):
    def test_short_versions(self):
        self.assertEqual(parse_version('2.5'), semver.Version(2, 5, 0))
        self.assertEqual(parse_version('4'), semver.Version(4, 0, 0))

    def test_prerelease(self):
        self.assertLess(parse_version('0.2.0-SNAPSHOT'), parse_version('0.2.0'))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            parse_version('not a version')


class TestIsAtLeast(unittest.TestCase):
    def test_numeric_comparison(self):
        # Not a string comparison, '4.10' > '4.2'
        self.assertTrue(is_at_least('4.10', '4.2'))
        self.assertTrue(is_at_least('10.0', '2.5'))

    def test_older(self):
        self.assertFalse(is_at_least('2.4', '2.5'))

    def test_equal(self):
        self.assertTrue(is_at_least('2.5', '2.5.0'))
