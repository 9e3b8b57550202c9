"""
A configurator for Checkstyle tasks.
"""

from __future__ import annotations

from pathlib import Path

from sca.libs.build.compat import HostCompat
from sca.libs.build.project import Project
from sca.libs.build.sourcesets import AndroidSourceSet, SourceSet
from sca.libs.build.tasks import Checkstyle
from sca.libs.sca.configurators.base import JAVA_SOURCES, AnalysisConfigurator
from sca.libs.sca.extension import RulesConfig, StaticCodeAnalysisExtension

CACHE_FILE_PROPERTY = 'checkstyle.cache.file'


def setup_cache_file(project: Project, task: Checkstyle, source_set_name: str):
    # One cache per source set
    task.config_properties[CACHE_FILE_PROPERTY] = str(project.build_dir / f"checkstyle-{source_set_name}.cache")


class CheckstyleConfigurator(AnalysisConfigurator):
    TOOL = 'checkstyle'
    TASK_TYPE = Checkstyle
    PLUGIN_ID = 'checkstyle'

    def rule_references(self, config: RulesConfig) -> list[str]:
        return [config.checkstyle_rules]

    def bind_rules(self, task: Checkstyle, rule_paths: list[Path]):
        task.config_file = rule_paths[0]
        HostCompat.for_project(task.project).clear_config_dir(task)

    def bind_source_set(
        self, project: Project, extension: StaticCodeAnalysisExtension, task: Checkstyle, source_set: SourceSet
    ):
        task.set_source(*source_set.java_src_dirs)
        task.include(JAVA_SOURCES)
        task.classpath = source_set.output_dirs + source_set.compile_classpath
        setup_cache_file(project, task, source_set.name)

    def bind_android_source_set(
        self,
        project: Project,
        extension: StaticCodeAnalysisExtension,
        task: Checkstyle,
        source_set: AndroidSourceSet,
    ):
        super().bind_android_source_set(project, extension, task, source_set)
        setup_cache_file(project, task, source_set.name)
