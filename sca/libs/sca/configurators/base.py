"""
Shared wiring of the analysis tools.

A configurator runs once per configuration phase:
- setup: apply the tool plugin and its project wide options,
- enumerate: register on the source set container, current and future source sets,
- wire each source set: rules, downloads, analysis task, aggregate task,
- finalize: gate the aggregate task under the check task.

Tools only provide their task type, the rule files they read and how a source set binds
to their task.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from sca.libs.build.project import CodeQualityExtension, Project
from sca.libs.build.sourcesets import AndroidSourceSet, NamedDomainObjectContainer, SourceSet
from sca.libs.build.tasks import AnalysisTask, DownloadTask
from sca.libs.sca.aggregator import attach, ensure_aggregate_task, gate_on_global_check
from sca.libs.sca.builder import ensure_analysis_task
from sca.libs.sca.extension import RulesConfig, StaticCodeAnalysisExtension
from sca.libs.sca.fetcher import RemoteConfigLocator
from sca.libs.sca.rules import Remote, classify
from sca.libs.sca.versions import ToolVersions

GENERATED_SOURCES = '**/gen/**'
JAVA_SOURCES = '**/*.java'
TOOL_VERSIONS_EXTENSION = 'scaToolVersions'


def tool_versions_for(project: Project, extension: StaticCodeAnalysisExtension) -> ToolVersions:
    versions = project.extensions.get(TOOL_VERSIONS_EXTENSION)
    if versions is None:
        versions = ToolVersions(extension.tool_versions)
        project.extensions[TOOL_VERSIONS_EXTENSION] = versions
    return versions


class AnalysisConfigurator(ABC):
    TOOL: ClassVar[str]
    TASK_TYPE: ClassVar[type[AnalysisTask]]
    # Host plugin providing the tool, None when the tool has none of its own
    PLUGIN_ID: ClassVar[str | None] = None

    def __init__(self):
        self.config_locator = RemoteConfigLocator(self.TOOL)

    def apply_config(self, project: Project, extension: StaticCodeAnalysisExtension):
        """Conventional layout, source sets of the java plugin."""
        self.setup_plugin(project, extension)
        self.setup_tasks_per_source_set(project, extension, project.source_sets, self.bind_source_set)

    def apply_android_config(self, project: Project, extension: StaticCodeAnalysisExtension):
        """Android layout, one source set per variant."""
        self.setup_plugin(project, extension)
        self.setup_tasks_per_source_set(project, extension, project.android.source_sets, self.bind_android_source_set)

    def setup_plugin(self, project: Project, extension: StaticCodeAnalysisExtension):
        if self.PLUGIN_ID is not None:
            project.plugins.apply(self.PLUGIN_ID)
        quality = project.extensions.setdefault(self.TOOL, CodeQualityExtension())

        versions = tool_versions_for(project, extension)
        quality.tool_version = versions.version(self.TOOL)
        quality.ignore_failures = extension.ignore_errors
        quality.show_violations = False

        versions.warn_if_outdated(self.TOOL)

    def setup_tasks_per_source_set(
        self,
        project: Project,
        extension: StaticCodeAnalysisExtension,
        source_sets: NamedDomainObjectContainer,
        binder,
    ):
        root_task = ensure_aggregate_task(project, self.TOOL)

        def wire(source_set):
            name = source_sets.namer(source_set)
            config = extension.source_set_config.maybe_create(name)
            rule_paths, fetch_tasks = self.resolve_rules(project, name, self.rule_references(config))

            task = ensure_analysis_task(
                project,
                self.TOOL,
                self.TASK_TYPE,
                name,
                rule_paths,
                source_set,
                lambda t, s: binder(project, extension, t, s),
                rules_binder=self.bind_rules,
                ignore_failures=config.ignore_errors,
                fetch_tasks=fetch_tasks,
            )
            attach(root_task, task)

        source_sets.all(wire)
        gate_on_global_check(project, root_task)

    def resolve_rules(
        self, project: Project, source_set_name: str, references: list[str]
    ) -> tuple[list[Path], list[DownloadTask]]:
        paths = []
        fetch_tasks = []
        for index, reference in enumerate(references):
            location = classify(reference)
            if isinstance(location, Remote):
                qualifier = str(index + 1) if index else None
                task, path = self.config_locator.ensure_download_task(
                    project, source_set_name, location.url, qualifier
                )
                fetch_tasks.append(task)
            else:
                path = project.file(location.path)
                path.parent.mkdir(parents=True, exist_ok=True)
            paths.append(path)

        return paths, fetch_tasks

    @abstractmethod
    def rule_references(self, config: RulesConfig) -> list[str]:
        """Rule file references of the tool for a source set."""

    def bind_rules(self, task: AnalysisTask, rule_paths: list[Path]):
        pass

    @abstractmethod
    def bind_source_set(
        self, project: Project, extension: StaticCodeAnalysisExtension, task: AnalysisTask, source_set: SourceSet
    ):
        """Sources, exclusions and classpath for a conventional source set."""

    def bind_android_source_set(
        self,
        project: Project,
        extension: StaticCodeAnalysisExtension,
        task: AnalysisTask,
        source_set: AndroidSourceSet,
    ):
        task.set_source(*source_set.java_src_dirs)
        task.include(JAVA_SOURCES)
        task.exclude(GENERATED_SOURCES)
        task.classpath = variant_classpath(project, source_set)


def variant_classpath(project: Project, source_set: AndroidSourceSet) -> list[Path]:
    configuration = project.configurations.find_by_name(source_set.package_configuration_name)
    return configuration.files if configuration is not None else []
