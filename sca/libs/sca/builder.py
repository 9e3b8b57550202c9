"""
Per source set analysis tasks.

Tasks are looked up before being created: the host may have registered them already,
and platforms declaring source sets late run the wiring again for existing ones.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar

from sca.libs.build.compat import HostCompat
from sca.libs.build.project import VERIFICATION_GROUP, Project
from sca.libs.build.tasks import AnalysisTask, Task
from sca.libs.sca.naming import analysis_task_name, claim_task

A = TypeVar('A', bound=AnalysisTask)


def report_destination(project: Project, tool: str, source_set_name: str) -> Path:
    return project.reporting_dir / tool / f"{tool}-{source_set_name}.xml"


def ensure_analysis_task(
    project: Project,
    tool: str,
    task_type: type[A],
    source_set_name: str,
    rule_paths: list[Path],
    source_set: Any,
    binder: Callable[[A, Any], None],
    rules_binder: Callable[[A, list[Path]], None] | None = None,
    ignore_failures: bool = True,
    fetch_tasks: Iterable[Task] = (),
) -> A:
    """
    Find or create the analysis task of the tool for the source set, and (re)configure it.

    binder receives (task, source_set) and sets the sources, exclusions and classpath.
    fetch_tasks are the downloads the rule paths depend on.
    """
    compat = HostCompat.for_project(project)

    name = analysis_task_name(tool, source_set_name)
    task = project.tasks.find_by_name(name)
    if task is None:
        task = project.tasks.create(name, task_type)
    claim_task(task, 'analysis', tool, source_set_name, expected_type=task_type)

    task.description = f"Runs {tool} analysis for {source_set_name} classes."
    task.group = VERIFICATION_GROUP

    if rules_binder is not None:
        rules_binder(task, rule_paths)

    task.ignore_failures = ignore_failures
    task.show_violations = False

    binder(task, source_set)

    compat.configure_xml_report(task, report_destination(project, tool, source_set_name))
    compat.disable_html_report(task)

    task.depends_on(*fetch_tasks)
    return task
