"""One no-op task per tool running all its per source set tasks, wired below the check task."""

from __future__ import annotations

from sca.libs.build.project import CHECK_TASK_NAME, VERIFICATION_GROUP, Project
from sca.libs.build.tasks import Task


def ensure_aggregate_task(project: Project, tool: str) -> Task:
    task = project.tasks.find_by_name(tool)
    if task is None:
        task = project.tasks.create(tool)
        task.description = f"Runs all {tool} tasks."
        task.group = VERIFICATION_GROUP
    return task


def attach(aggregate: Task, task: Task):
    aggregate.depends_on(task)


def gate_on_global_check(project: Project, aggregate: Task):
    project.tasks[CHECK_TASK_NAME].depends_on(aggregate)
