"""
Task model of the host build.

Tasks are only configured here. Nothing runs until the executor walks the graph,
so every attribute may be changed as long as the configuration phase lasts.
"""

from __future__ import annotations

import fnmatch
import os
import shlex
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from invoke import Context

from sca.libs.common.download import download
from sca.libs.common.exceptions import DuplicateTaskError, UnknownTaskError

if TYPE_CHECKING:
    from sca.libs.build.project import Project

T = TypeVar('T', bound='Task')

# Host versions where the reports and conventions changed
HTML_REPORTS_SINCE = "2.10"
CONFIG_DIR_CONVENTION_SINCE = "4.0"


def matches_pattern(relative_path: str, pattern: str) -> bool:
    """Ant-like matching: a leading '**/' also matches files at the root."""
    if fnmatch.fnmatchcase(relative_path, pattern):
        return True
    return pattern.startswith('**/') and fnmatch.fnmatchcase(relative_path, pattern[3:])


def collect_files(roots: list[Path], includes: list[str], excludes: list[str]) -> list[Path]:
    files = []
    for root in roots:
        if not root.is_dir():
            continue
        for dirpath, _, filenames in os.walk(root):
            for filename in sorted(filenames):
                path = Path(dirpath, filename)
                relative = path.relative_to(root).as_posix()
                if includes and not any(matches_pattern(relative, p) for p in includes):
                    continue
                if any(matches_pattern(relative, p) for p in excludes):
                    continue
                files.append(path)
    return sorted(files)


class Task:
    """A named unit of work, with a set of tasks it depends on."""

    def __init__(self, name: str, project: Project):
        self.name = name
        self.project = project
        self.description = ""
        self.group: str | None = None
        self.actions: list[Callable[[Task, Context], None]] = []
        # Extra properties set by plugins
        self.ext: dict[str, object] = {}
        # dict keys keep insertion order and never hold duplicates
        self._depends_on: dict[str, Task] = {}

    def depends_on(self, *tasks: Task) -> Task:
        for task in tasks:
            self._depends_on.setdefault(task.name, task)
        return self

    @property
    def dependencies(self) -> list[Task]:
        return list(self._depends_on.values())

    def configure(self: T, action: Callable[[T], object]) -> T:
        action(self)
        return self

    def do_last(self, action: Callable[[Task, Context], None]) -> Task:
        self.actions.append(action)
        return self

    def execute(self, ctx: Context):
        for action in self.actions:
            action(self, ctx)

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class DownloadTask(Task):
    """Fetches a single remote file. The file only exists once the task has run."""

    def __init__(self, name: str, project: Project):
        super().__init__(name, project)
        self.src: str | None = None
        self.dest: Path | None = None
        self.do_last(DownloadTask._download)

    def _download(self, _ctx: Context):
        download(self.src, str(self.dest))


class SourceTask(Task):
    def __init__(self, name: str, project: Project):
        super().__init__(name, project)
        self.source: list[Path] = []
        self.includes: list[str] = []
        self.excludes: list[str] = []

    def set_source(self, *paths):
        self.source = [self.project.file(p) for p in paths]

    def include(self, *patterns: str):
        self.includes.extend(p for p in patterns if p not in self.includes)

    def exclude(self, *patterns: str):
        self.excludes.extend(p for p in patterns if p not in self.excludes)

    def source_files(self) -> list[Path]:
        return collect_files(self.source, self.includes, self.excludes)


@dataclass
class Report:
    name: str
    enabled: bool = False
    destination: Path | None = None


@dataclass
class Reports:
    xml: Report = field(default_factory=lambda: Report('xml'))
    # Hosts older than HTML_REPORTS_SINCE have no html report at all
    html: Report | None = None

    def enabled(self) -> list[Report]:
        return [report for report in (self.xml, self.html) if report is not None and report.enabled]


class AnalysisTask(SourceTask):
    """
    Base of the native analysis task types, one per tool.

    Host conventions: failures stop the build, violations are shown on the console
    and the html report is enabled.
    """

    TOOL = ""

    def __init__(self, name: str, project: Project):
        super().__init__(name, project)
        self.classpath: list[Path] = []
        self.ignore_failures = False
        self.show_violations = True
        self._tool_version: str | None = None
        self.reports = Reports()
        if project.host_at_least(HTML_REPORTS_SINCE):
            self.reports.html = Report('html', enabled=True)
        self.do_last(AnalysisTask._run_tool)

    @property
    def tool_version(self) -> str | None:
        """Explicit version of this task, else the one of the project wide quality extension."""
        if self._tool_version is not None:
            return self._tool_version
        extension = self.project.extensions.get(self.TOOL)
        return getattr(extension, 'tool_version', None)

    @tool_version.setter
    def tool_version(self, version: str | None):
        self._tool_version = version

    def command(self) -> list[str]:
        raise NotImplementedError

    def _run_tool(self, ctx: Context):
        for report in self.reports.enabled():
            if report.destination is not None:
                report.destination.parent.mkdir(parents=True, exist_ok=True)
        ctx.run(shlex.join(self.command()), warn=self.ignore_failures, hide=not self.show_violations)

    def xml_destination(self) -> str:
        destination = self.reports.xml.destination
        return str(destination) if destination else str(self.project.reporting_dir / self.TOOL / f"{self.name}.xml")


class Checkstyle(AnalysisTask):
    TOOL = "checkstyle"

    def __init__(self, name: str, project: Project):
        super().__init__(name, project)
        self.config_file: Path | None = None
        self.config_dir: Path | None = None
        self.config_properties: dict[str, str] = {}
        if project.host_at_least(CONFIG_DIR_CONVENTION_SINCE):
            self.config_dir = project.root_dir / 'config' / 'checkstyle'

    def properties_file(self) -> Path:
        return self.project.build_dir / 'tmp' / self.name / 'checkstyle.properties'

    def command(self) -> list[str]:
        command = ["checkstyle", "-c", str(self.config_file), "-f", "xml", "-o", self.xml_destination()]
        if self.config_properties:
            properties = self.properties_file()
            properties.parent.mkdir(parents=True, exist_ok=True)
            properties.write_text("".join(f"{key}={value}\n" for key, value in self.config_properties.items()))
            command += ["-p", str(properties)]
        return command + [str(f) for f in self.source_files()]


class Pmd(AnalysisTask):
    TOOL = "pmd"

    def __init__(self, name: str, project: Project):
        super().__init__(name, project)
        self.rule_sets: list[Path] = []

    def command(self) -> list[str]:
        command = ["pmd", "check", "--no-progress", "-f", "xml", "-r", self.xml_destination()]
        command += ["-R", ",".join(str(r) for r in self.rule_sets)]
        if self.classpath:
            command += ["--aux-classpath", os.pathsep.join(str(p) for p in self.classpath)]
        return command + ["-d", ",".join(str(f) for f in self.source_files())]


class SpotBugs(AnalysisTask):
    TOOL = "spotbugs"

    def __init__(self, name: str, project: Project):
        super().__init__(name, project)
        self.classes_dirs: list[Path] = []
        self.class_excludes: list[str] = []
        self.exclude_filter: Path | None = None
        self.effort = "default"
        self.plugin_classpath: list[Path] = []

    def class_files(self) -> list[Path]:
        return collect_files(self.classes_dirs, ['**/*.class'], self.class_excludes)

    def command(self) -> list[str]:
        command = ["spotbugs", "-textui", f"-effort:{self.effort}", "-xml:withMessages", "-output"]
        command.append(self.xml_destination())
        if self.exclude_filter:
            command += ["-exclude", str(self.exclude_filter)]
        if self.classpath:
            command += ["-auxclasspath", os.pathsep.join(str(p) for p in self.classpath)]
        if self.plugin_classpath:
            command += ["-pluginList", os.pathsep.join(str(p) for p in self.plugin_classpath)]
        return command + [str(f) for f in self.class_files()]


class Cpd(AnalysisTask):
    TOOL = "cpd"

    def __init__(self, name: str, project: Project):
        super().__init__(name, project)
        self.minimum_token_count = 100
        self.language = "java"

    def command(self) -> list[str]:
        command = ["pmd", "cpd", "--minimum-tokens", str(self.minimum_token_count), "--language", self.language]
        command += ["--format", "xml", "-r", self.xml_destination()]
        return command + ["-d", ",".join(str(f) for f in self.source_files())]


class TaskContainer:
    """Registry of the tasks of one project, keyed by task name."""

    def __init__(self, project: Project):
        self.project = project
        self._tasks: dict[str, Task] = {}

    def find_by_name(self, name: str) -> Task | None:
        return self._tasks.get(name)

    def create(self, name: str, type: type[T] = Task, configure: Callable[[T], object] | None = None) -> T:
        if name in self._tasks:
            raise DuplicateTaskError(name)

        task = type(name, self.project)
        self._tasks[name] = task
        if configure is not None:
            task.configure(configure)
        return task

    def with_type(self, type: type[T]) -> list[T]:
        return [task for task in self._tasks.values() if isinstance(task, type)]

    @property
    def names(self) -> list[str]:
        return sorted(self._tasks)

    def __getitem__(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))
