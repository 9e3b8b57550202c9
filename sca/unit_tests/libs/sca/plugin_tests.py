import tempfile
import unittest
from pathlib import Path

from sca.libs.build.project import CHECK_TASK_NAME, Project
from sca.libs.build.tasks import AnalysisTask, DownloadTask
from sca.libs.common.exceptions import UnsupportedHostVersionError
from sca.libs.sca.extension import StaticCodeAnalysisExtension
from sca.libs.sca.plugin import StaticCodeAnalysisPlugin


class PluginTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name).resolve()

    def tearDown(self):
        self.tmpdir.cleanup()

    def project(self, *plugins, host_version="7.6"):
        project = Project('app', self.root, host_version=host_version)
        for plugin_id in plugins:
            project.plugins.apply(plugin_id)
        return project


class TestStaticCodeAnalysisPlugin(PluginTestCase):
    def test_java_project(self):
        project = self.project('java')

        StaticCodeAnalysisPlugin().apply(project)
        project.evaluate()

        for tool in ('spotbugs', 'checkstyle', 'pmd', 'cpd'):
            for source_set in ('Main', 'Test'):
                with self.subTest(tool=tool, source_set=source_set):
                    self.assertIsInstance(project.tasks[f"{tool}{source_set}"], AnalysisTask)
        self.assertEqual(
            [t.name for t in project.tasks[CHECK_TASK_NAME].dependencies], ['spotbugs', 'checkstyle', 'pmd', 'cpd']
        )
        self.assertEqual(project.tasks.with_type(DownloadTask), [])

    def test_nothing_is_wired_before_evaluation(self):
        project = self.project('java')

        extension = StaticCodeAnalysisPlugin().apply(project)

        self.assertIs(project.extensions[StaticCodeAnalysisExtension.NAME], extension)
        self.assertEqual(project.tasks[CHECK_TASK_NAME].dependencies, [])

    def test_settings_changed_before_evaluation(self):
        project = self.project('java')

        extension = StaticCodeAnalysisPlugin().apply(project)
        extension.pmd = False
        extension.cpd = False
        extension.checkstyle_rules = 'https://example.com/style.xml'
        project.evaluate()

        self.assertIsNone(project.tasks.find_by_name('pmdMain'))
        self.assertIsNone(project.tasks.find_by_name('cpd'))
        self.assertEqual(
            {t.name for t in project.tasks.with_type(DownloadTask)},
            {'downloadCheckstyleXmlMain', 'downloadCheckstyleXmlTest'},
        )

    def test_android_project(self):
        project = self.project('com.android.library')

        StaticCodeAnalysisPlugin().apply(project)
        project.evaluate()
        project.android.source_sets.create('debug')

        self.assertIn('checkstyleMain', project.tasks)
        self.assertIn('checkstyleDebug', project.tasks)
        self.assertIn(project.tasks['spotbugsDebug'], project.tasks['spotbugs'].dependencies)

    def test_neither_java_nor_android(self):
        project = self.project()

        with self.assertLogs('sca.libs.sca.plugin', level='WARNING') as logs:
            StaticCodeAnalysisPlugin().apply(project)
            project.evaluate()

        self.assertIn('nothing to analyze', logs.output[0])
        self.assertEqual(project.tasks.names, [CHECK_TASK_NAME])

    def test_outdated_tool_warns_once(self):
        project = self.project('java')
        extension = StaticCodeAnalysisExtension(tool_versions={'pmd': '6.0.0'})

        with self.assertLogs('sca.libs.sca.versions', level='WARNING') as logs:
            StaticCodeAnalysisPlugin().apply(project, extension)
            project.evaluate()

        self.assertEqual(len(logs.records), 1)
        self.assertIn('pmd', logs.output[0])
        self.assertEqual(project.tasks['pmdMain'].tool_version, '6.0.0')


class TestHostVersion(PluginTestCase):
    def test_too_old(self):
        project = self.project('java', host_version="2.4")

        with self.assertRaises(UnsupportedHostVersionError) as e:
            StaticCodeAnalysisPlugin().apply(project)

        self.assertEqual(str(e.exception), "Host version should be 2.5 or higher. Current version: 2.4")
        self.assertNotIn(StaticCodeAnalysisExtension.NAME, project.extensions)

    def test_minimum(self):
        project = self.project('java', host_version="2.5")

        StaticCodeAnalysisPlugin().apply(project)
        project.evaluate()

        self.assertIsNone(project.tasks['checkstyleMain'].reports.html)
        self.assertTrue(project.tasks['checkstyleMain'].reports.xml.enabled)
