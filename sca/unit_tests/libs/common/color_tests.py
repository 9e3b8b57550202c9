import os
import unittest
from unittest.mock import patch

from sca.libs.common.color import COLORS, ENDC, Color, color_message, task_status


@patch.dict(os.environ, {}, clear=True)
class TestColorMessage(unittest.TestCase):
    def test_color(self):
        self.assertEqual(color_message('done', Color.GREEN), f"{COLORS[Color.GREEN]}done{ENDC}")

    def test_unknown_color(self):
        self.assertEqual(color_message('done', 'magenta'), 'done')

    def test_no_color(self):
        with patch.dict(os.environ, {'NO_COLOR': '1'}):
            self.assertEqual(color_message('done', Color.RED), 'done')


@patch.dict(os.environ, {'NO_COLOR': '1'}, clear=True)
class TestTaskStatus(unittest.TestCase):
    def test_running(self):
        self.assertEqual(task_status('checkstyleMain'), '> Task :checkstyleMain')

    def test_outcome(self):
        self.assertEqual(task_status('pmdTest', 'FAILED'), '> Task :pmdTest FAILED')
        self.assertEqual(task_status('pmd', 'SKIPPED'), '> Task :pmd SKIPPED')

    def test_colors(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertTrue(task_status('pmdTest', 'FAILED').startswith(COLORS[Color.RED]))
            self.assertTrue(task_status('pmd', 'SKIPPED').startswith(COLORS[Color.GREY]))
            self.assertTrue(task_status('pmd').startswith(COLORS[Color.BLUE]))
