"""
Static code analysis tasks: wire the analysis tasks of a project and run them.
"""

from __future__ import annotations

import os
from collections import defaultdict

from invoke import task
from invoke.exceptions import Exit

from sca.libs.build.executor import TaskExecutor
from sca.libs.build.project import CHECK_TASK_NAME, Project
from sca.libs.build.tasks import DownloadTask
from sca.libs.common.color import Color, color_message
from sca.libs.common.exceptions import ScaError, TaskExecutionError
from sca.libs.sca.extension import StaticCodeAnalysisExtension
from sca.libs.sca.plugin import StaticCodeAnalysisPlugin

PROJECT_FILE = "sca-project.yml"


def load_project(project_file: str = PROJECT_FILE, config: str = StaticCodeAnalysisExtension.FILE_NAME) -> Project:
    """
    Load the project descriptor and wire its analysis tasks.
    A missing sca.yml is not an error, the default settings are used instead.
    """
    project = Project.from_file(project_file)
    extension = StaticCodeAnalysisExtension.from_file(config) if os.path.isfile(config) else None
    StaticCodeAnalysisPlugin().apply(project, extension)
    project.evaluate()
    return project


def _load_or_exit(project_file: str, config: str) -> Project:
    try:
        return load_project(project_file, config)
    except ScaError as e:
        raise Exit(color_message(str(e), Color.RED), code=1) from e


@task
def tasks(_, project_file=PROJECT_FILE, config=StaticCodeAnalysisExtension.FILE_NAME, all_tasks=False):
    """
    List the verification tasks of the project and what they depend on.

    - all_tasks: Also list the tasks outside of the verification group
    """
    project = _load_or_exit(project_file, config)

    groups = defaultdict(list)
    for t in project.tasks:
        if all_tasks or t.group or isinstance(t, DownloadTask):
            groups[t.group or "other"].append(t)

    for group in sorted(groups):
        print(color_message(f"{group.capitalize()} tasks", Color.BOLD))
        print(color_message("-" * (len(group) + 6), Color.BOLD))
        for t in sorted(groups[group], key=lambda t: t.name):
            description = f" - {t.description}" if t.description else ""
            print(f"{color_message(t.name, Color.GREEN)}{description}")
            for dependency in t.dependencies:
                print(color_message(f"    depends on {dependency.name}", Color.GREY))
        print()


@task(iterable=['target'])
def check(ctx, project_file=PROJECT_FILE, config=StaticCodeAnalysisExtension.FILE_NAME, target=None, keep_going=False):
    """
    Run the analysis tasks, by default everything the check task depends on.

    - target: Task to run instead of check, can be repeated
    - keep_going: Keep running the tasks that do not depend on a failed one
    """
    project = _load_or_exit(project_file, config)
    targets = target or [CHECK_TASK_NAME]

    try:
        executed = TaskExecutor(project).execute(ctx, targets, keep_going=keep_going)
    except TaskExecutionError as e:
        raise Exit(e.pretty_print(), code=1) from e
    except ScaError as e:
        raise Exit(color_message(str(e), Color.RED), code=1) from e

    print(color_message(f"{len(executed)} task(s) executed successfully.", Color.GREEN))


@task
def download_rules(ctx, project_file=PROJECT_FILE, config=StaticCodeAnalysisExtension.FILE_NAME):
    """
    Download every remote rule file of the project without running any analysis.
    """
    project = _load_or_exit(project_file, config)
    downloads = project.tasks.with_type(DownloadTask)
    if not downloads:
        print(color_message("No remote rule file to download.", Color.GREEN))
        return

    try:
        TaskExecutor(project).execute(ctx, downloads, keep_going=True)
    except TaskExecutionError as e:
        raise Exit(e.pretty_print(), code=1) from e
