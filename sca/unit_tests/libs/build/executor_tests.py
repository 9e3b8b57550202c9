import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from sca.libs.build.executor import TaskExecutor, execution_plan
from sca.libs.build.project import Project
from sca.libs.common.exceptions import TaskCycleError, TaskExecutionError


def failing_action(task, ctx):
    raise RuntimeError(f"{task.name} is broken")


class TestTaskExecutor(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.project = Project('app', self.tmpdir.name)
        self.ran = []
        for name in ('download', 'analysis', 'other', 'aggregate'):
            task = self.project.tasks.create(name)
            task.do_last(lambda t, ctx: self.ran.append(t.name))
        self.tasks = self.project.tasks
        self.tasks['analysis'].depends_on(self.tasks['download'])
        self.tasks['aggregate'].depends_on(self.tasks['analysis'], self.tasks['other'])
        self.tasks['check'].depends_on(self.tasks['aggregate'])

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_plan_order(self):
        plan = execution_plan([self.tasks['check']])

        self.assertEqual([t.name for t in plan], ['download', 'analysis', 'other', 'aggregate', 'check'])

    def test_each_task_runs_once(self):
        self.tasks['other'].depends_on(self.tasks['download'])

        TaskExecutor(self.project).execute(MagicMock(), ['check', 'analysis'])

        self.assertEqual(self.ran, ['download', 'analysis', 'other', 'aggregate'])

    def test_cycle(self):
        self.tasks['download'].depends_on(self.tasks['aggregate'])

        with self.assertRaises(TaskCycleError) as e:
            execution_plan([self.tasks['check']])
        self.assertEqual(e.exception.cycle[0], e.exception.cycle[-1])

    def test_failure_stops(self):
        self.tasks['download'].do_last(failing_action)

        with self.assertRaises(TaskExecutionError) as e:
            TaskExecutor(self.project).execute(MagicMock(), ['check'])

        self.assertEqual(list(e.exception.failures), ['download'])
        self.assertEqual(self.ran, ['download'])

    def test_keep_going_runs_unrelated_tasks(self):
        self.tasks['download'].do_last(failing_action)

        with self.assertRaises(TaskExecutionError) as e:
            TaskExecutor(self.project).execute(MagicMock(), ['check'], keep_going=True)

        self.assertEqual(self.ran, ['download', 'other'])
        self.assertEqual(e.exception.skipped, ['analysis', 'aggregate', 'check'])
        self.assertIn('download is broken', e.exception.summary())

    @patch.dict(os.environ, {'NO_COLOR': '1'})
    @patch('builtins.print')
    def test_prints_task_outcomes(self, mock_print):
        self.tasks['download'].do_last(failing_action)

        with self.assertRaises(TaskExecutionError):
            TaskExecutor(self.project).execute(MagicMock(), ['analysis'], keep_going=True)

        self.assertEqual(
            [call.args[0] for call in mock_print.call_args_list],
            ['> Task :download', '> Task :download FAILED', '> Task :analysis SKIPPED'],
        )

    def test_returns_executed_tasks(self):
        executed = TaskExecutor(self.project).execute(MagicMock(), [self.tasks['analysis']])

        self.assertEqual([t.name for t in executed], ['download', 'analysis'])
