"""
Execution phase of the host build: run a set of target tasks and everything they depend on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from invoke import Context

from sca.libs.build.project import Project
from sca.libs.build.tasks import Task
from sca.libs.common.color import task_status
from sca.libs.common.exceptions import TaskCycleError, TaskExecutionError

logger = logging.getLogger(__name__)


def execution_plan(targets: Iterable[Task]) -> list[Task]:
    """Dependencies first, each task exactly once. Raises TaskCycleError on cycles."""
    plan: list[Task] = []
    done: set[str] = set()
    visiting: list[str] = []

    def visit(task: Task):
        if task.name in done:
            return
        if task.name in visiting:
            raise TaskCycleError(visiting[visiting.index(task.name) :] + [task.name])

        visiting.append(task.name)
        for dependency in task.dependencies:
            visit(dependency)
        visiting.pop()

        done.add(task.name)
        plan.append(task)

    for target in targets:
        visit(target)

    return plan


class TaskExecutor:
    def __init__(self, project: Project):
        self.project = project

    def execute(self, ctx: Context, targets: Iterable[str | Task], keep_going: bool = False) -> list[Task]:
        """
        Run the targets and their dependencies, returns the tasks that were run.

        A failed task skips all the tasks depending on it. Without keep_going the first
        failure stops the run, otherwise unrelated tasks still run. In both cases the
        failures are raised together as a TaskExecutionError.
        """
        tasks = [target if isinstance(target, Task) else self.project.tasks[target] for target in targets]
        plan = execution_plan(tasks)

        executed: list[Task] = []
        failures: dict[str, BaseException] = {}
        skipped: list[str] = []

        for task in plan:
            if any(dependency.name in failures or dependency.name in skipped for dependency in task.dependencies):
                skipped.append(task.name)
                print(task_status(task.name, "SKIPPED"))
                continue

            print(task_status(task.name))
            try:
                task.execute(ctx)
            except Exception as e:
                logger.debug("Task %s failed", task.name, exc_info=True)
                print(task_status(task.name, "FAILED"))
                failures[task.name] = e
                if not keep_going:
                    break
                continue

            executed.append(task)

        if failures:
            raise TaskExecutionError(failures, skipped)

        return executed
