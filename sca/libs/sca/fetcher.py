from __future__ import annotations

from pathlib import Path

from sca.libs.build.project import Project
from sca.libs.build.tasks import DownloadTask
from sca.libs.sca.naming import claim_task, download_task_name

CONFIG_DIR = "config"


class RemoteConfigLocator:
    """
    Makes remote rule files of one tool available locally through download tasks.

    Every source set gets its own copy, even when several of them use the same URL,
    so no download ever overwrites a file another source set relies on.
    """

    def __init__(self, tool: str):
        self.tool = tool

    def destination(self, project: Project, source_set_name: str, qualifier: str | None = None) -> Path:
        suffix = f"-{qualifier}" if qualifier else ""
        return project.root_dir / CONFIG_DIR / self.tool / f"{self.tool}-{source_set_name}{suffix}.xml"

    def ensure_download_task(
        self, project: Project, source_set_name: str, url: str, qualifier: str | None = None
    ) -> tuple[DownloadTask, Path]:
        """
        Find or create the task downloading url for the source set.

        The returned path does not exist until the task has run: consumers must depend on
        the task, nothing is fetched at configuration time.
        """
        name = download_task_name(self.tool, source_set_name, qualifier)
        task = project.tasks.find_by_name(name)
        if task is None:
            task = project.tasks.create(name, DownloadTask)

        claim_task(task, 'download', self.tool, source_set_name, qualifier or '', expected_type=DownloadTask)
        # Tasks registered by the host are adopted, the destination is always ours
        task.description = f"Downloads the {self.tool} rules of the {source_set_name} source set."
        task.dest = self.destination(project, source_set_name, qualifier)
        task.src = url
        return task, task.dest
