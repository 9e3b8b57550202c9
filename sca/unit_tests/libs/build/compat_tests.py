import tempfile
import unittest
from pathlib import Path

from sca.libs.build.compat import HostCompat, LegacyHostCompat, ModernHostCompat, check_host_version
from sca.libs.build.project import Project
from sca.libs.build.tasks import Checkstyle
from sca.libs.common.exceptions import UnsupportedHostVersionError


class TestCheckHostVersion(unittest.TestCase):
    def test_too_old(self):
        with self.assertRaises(UnsupportedHostVersionError) as e:
            check_host_version('2.4')
        self.assertEqual(str(e.exception), 'Host version should be 2.5 or higher. Current version: 2.4')

    def test_not_a_version(self):
        with self.assertRaises(UnsupportedHostVersionError):
            check_host_version('latest')

    def test_supported(self):
        check_host_version('2.5')
        check_host_version('2.14.1')


class TestHostCompat(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name).resolve()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_selection(self):
        self.assertIsInstance(HostCompat.for_version('3.5'), LegacyHostCompat)
        self.assertIsInstance(HostCompat.for_version('4.0'), ModernHostCompat)
        self.assertIsInstance(HostCompat.for_version('4.10.2'), ModernHostCompat)

    def test_for_project_is_cached(self):
        project = Project('app', self.root, host_version='4.2')

        self.assertIs(HostCompat.for_project(project), HostCompat.for_project(project))

    def test_modern_clears_config_dir(self):
        project = Project('app', self.root, host_version='4.2')
        task = project.tasks.create('checkstyleMain', Checkstyle)

        HostCompat.for_project(project).clear_config_dir(task)

        self.assertIsNone(task.config_dir)

    def test_legacy_has_no_html_report(self):
        project = Project('app', self.root, host_version='2.8')
        task = project.tasks.create('checkstyleMain', Checkstyle)
        compat = HostCompat.for_project(project)

        compat.disable_html_report(task)
        compat.configure_xml_report(task, self.root / 'report.xml')

        self.assertIsNone(task.reports.html)
        self.assertEqual(task.reports.enabled(), [task.reports.xml])
        self.assertEqual(task.reports.xml.destination, self.root / 'report.xml')

    def test_html_report_disabled(self):
        project = Project('app', self.root, host_version='3.5')
        task = project.tasks.create('checkstyleMain', Checkstyle)

        HostCompat.for_project(project).disable_html_report(task)

        self.assertFalse(task.reports.html.enabled)
