"""
Deterministic task names.

Every task generated for a (tool, source set) key is claimed by that key, so two keys
which happen to produce the same name are detected instead of silently sharing a task.
"""

from __future__ import annotations

from sca.libs.build.tasks import Task
from sca.libs.common.exceptions import TaskNameCollisionError
from sca.libs.common.utils import capitalize, lower_camel_case

OWNER_PROPERTY = "sca.owner"
DOWNLOAD_PREFIX = "download"


def analysis_task_name(tool: str, source_set_name: str) -> str:
    return lower_camel_case(tool, source_set_name)


def download_task_name(tool: str, source_set_name: str, qualifier: str | None = None) -> str:
    parts = [f"{DOWNLOAD_PREFIX}{capitalize(tool)}Xml", source_set_name]
    if qualifier:
        parts.append(qualifier)
    return lower_camel_case(*parts)


def claim_task(task: Task, *key: str, expected_type: type[Task] = Task) -> Task:
    """Mark task as owned by key. Raises TaskNameCollisionError if something else owns it."""
    if not isinstance(task, expected_type):
        raise TaskNameCollisionError(task.name, (type(task).__name__,), key)

    owner = task.ext.setdefault(OWNER_PROPERTY, key)
    if owner != key:
        raise TaskNameCollisionError(task.name, owner, key)
    return task
