"""
In-process model of the host build project the analysis tasks are wired into.

The project owns its task registry, dependency configurations, applied plugins and
extensions. A project only lives for one configuration run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from sca.libs.build.sourcesets import AndroidSourceSet, Configuration, NamedDomainObjectContainer, SourceSet
from sca.libs.build.tasks import AnalysisTask, Checkstyle, Pmd, SpotBugs, TaskContainer
from sca.libs.common.exceptions import ConfigurationError, UnsupportedHostVersionError
from sca.libs.common.utils import lower_camel_case
from sca.libs.common.version import is_at_least, parse_version

DEFAULT_HOST_VERSION = "7.6"
MINIMUM_HOST_VERSION = "2.5"
CHECK_TASK_NAME = "check"
VERIFICATION_GROUP = "verification"

JAVA_PLUGIN = "java"
ANDROID_PLUGINS = ("com.android.application", "com.android.library")

# Quality plugins provided by the host, with the task type they register per source set
QUALITY_PLUGINS: dict[str, type[AnalysisTask]] = {
    "checkstyle": Checkstyle,
    "pmd": Pmd,
    "spotbugs": SpotBugs,
}


@dataclass
class CodeQualityExtension:
    """Project wide options of a host quality plugin."""

    tool_version: str | None = None
    ignore_failures: bool = False
    show_violations: bool = True


class AndroidExtension:
    def __init__(self, project: Project):
        self.source_sets: NamedDomainObjectContainer[AndroidSourceSet] = NamedDomainObjectContainer(
            lambda name: AndroidSourceSet.conventional(project.project_dir, name)
        )


class PluginContainer:
    def __init__(self, project: Project):
        self.project = project
        self._applied: list[str] = []

    def apply(self, plugin_id: str):
        if plugin_id in self._applied:
            return

        self._applied.append(plugin_id)
        self.project._on_plugin_applied(plugin_id)

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self._applied


class Project:
    def __init__(
        self,
        name: str,
        project_dir: str | Path,
        root_dir: str | Path | None = None,
        host_version: str = DEFAULT_HOST_VERSION,
        build_dir: str | Path | None = None,
    ):
        self.name = name
        self.project_dir = Path(project_dir).resolve()
        self.root_dir = Path(root_dir).resolve() if root_dir else self.project_dir
        self.build_dir = self.file(build_dir) if build_dir else self.project_dir / 'build'
        self.host_version = host_version
        try:
            parse_version(host_version)
        except ValueError:
            # Tasks compare against the host version as soon as they are created
            raise UnsupportedHostVersionError(MINIMUM_HOST_VERSION, host_version) from None

        self.tasks = TaskContainer(self)
        self.configurations: NamedDomainObjectContainer[Configuration] = NamedDomainObjectContainer(Configuration)
        self.plugins = PluginContainer(self)
        self.extensions: dict[str, Any] = {}
        self.source_sets: NamedDomainObjectContainer[SourceSet] | None = None
        self.android: AndroidExtension | None = None

        self._after_evaluate: list[Callable[[Project], None]] = []
        self._evaluated = False

        check = self.tasks.create(CHECK_TASK_NAME)
        check.description = "Runs all checks."
        check.group = VERIFICATION_GROUP

    @property
    def reporting_dir(self) -> Path:
        return self.build_dir / 'reports'

    def file(self, path: str | Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.project_dir / path

    def host_at_least(self, version: str) -> bool:
        return is_at_least(self.host_version, version)

    def after_evaluate(self, action: Callable[[Project], None]):
        if self._evaluated:
            action(self)
        else:
            self._after_evaluate.append(action)

    def evaluate(self):
        if self._evaluated:
            return

        self._evaluated = True
        for action in self._after_evaluate:
            action(self)
        self._after_evaluate.clear()

    def _on_plugin_applied(self, plugin_id: str):
        if plugin_id == JAVA_PLUGIN:
            self.source_sets = NamedDomainObjectContainer(
                lambda name: SourceSet.conventional(self.project_dir, self.build_dir, name)
            )
            self.source_sets.create('main')
            self.source_sets.create('test')
        elif plugin_id in ANDROID_PLUGINS and self.android is None:
            self.configurations.maybe_create('compile')
            self.android = AndroidExtension(self)
            self.android.source_sets.all(
                lambda source_set: self.configurations.maybe_create(source_set.package_configuration_name)
            )
            self.android.source_sets.create('main')
        elif plugin_id in QUALITY_PLUGINS:
            self.extensions[plugin_id] = CodeQualityExtension()
            self.configurations.maybe_create(plugin_id)
            if self.source_sets is not None:
                self.source_sets.all(lambda source_set: self._add_quality_task(plugin_id, source_set))

    def _add_quality_task(self, plugin_id: str, source_set: SourceSet):
        name = lower_camel_case(plugin_id, source_set.name)
        if name not in self.tasks:
            task = self.tasks.create(name, QUALITY_PLUGINS[plugin_id])
            task.set_source(*source_set.java_src_dirs)

    def __repr__(self):
        return f"Project({self.name!r})"

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> Project:
        """
        Build a project from its descriptor, e.g.:

        > name: app
        > host_version: "4.2"
        > plugins: [java]
        > configurations:
        >   compile: [libs/guava.jar]
        > source_sets:
        >   main:
        >     java: [src/main/java]
        >     output: [build/classes/java/main]
        >     compile_classpath: [libs/guava.jar]
        """
        base_dir = base_dir or Path.cwd()
        if not isinstance(data, dict) or 'name' not in data:
            raise ConfigurationError("The project descriptor must be a mapping with at least a 'name'")

        project = cls(
            str(data['name']),
            base_dir / data.get('project_dir', '.'),
            root_dir=base_dir / data['root_dir'] if 'root_dir' in data else None,
            host_version=str(data.get('host_version', DEFAULT_HOST_VERSION)),
            build_dir=data.get('build_dir'),
        )

        for plugin_id in data.get('plugins', []):
            project.plugins.apply(plugin_id)

        for name, files in (data.get('configurations') or {}).items():
            project.configurations.maybe_create(name).dependencies.extend(project.file(f) for f in files or [])

        for name, source_set_data in (data.get('source_sets') or {}).items():
            project.add_source_set(name, source_set_data or {})

        return project

    @classmethod
    def from_file(cls, path: str | Path) -> Project:
        path = Path(path)
        try:
            with open(path) as file:
                data = yaml.safe_load(file)
        except FileNotFoundError:
            raise ConfigurationError(f"Project descriptor not found: {path}") from None
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid project descriptor {path}: {e}") from e

        return cls.from_dict(data, base_dir=path.parent)

    def add_source_set(self, name: str, data: dict[str, Any]) -> SourceSet | AndroidSourceSet:
        if self.android is not None:
            source_set = self.android.source_sets.find_by_name(name) or AndroidSourceSet.conventional(
                self.project_dir, name
            )
            if 'package_configuration' in data:
                source_set.package_configuration_name = data['package_configuration']
            if 'java' in data:
                source_set.java_src_dirs = [self.file(p) for p in data['java']]
            self.configurations.maybe_create(source_set.package_configuration_name)
            self.android.source_sets.add(source_set)
            return source_set

        if self.source_sets is None:
            raise ConfigurationError(f"Cannot declare source set '{name}' without the java or an android plugin")

        source_set = self.source_sets.find_by_name(name) or SourceSet.conventional(
            self.project_dir, self.build_dir, name
        )
        if 'java' in data:
            source_set.java_src_dirs = [self.file(p) for p in data['java']]
        if 'output' in data:
            source_set.output_dirs = [self.file(p) for p in data['output']]
        if 'compile_classpath' in data:
            source_set.compile_classpath = [self.file(p) for p in data['compile_classpath']]
        self.source_sets.add(source_set)
        return source_set
