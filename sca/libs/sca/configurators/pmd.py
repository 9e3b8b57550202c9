"""
A configurator for PMD tasks. PMD takes several rule sets, each of them may be remote.
"""

from __future__ import annotations

from pathlib import Path

from sca.libs.build.project import Project
from sca.libs.build.sourcesets import SourceSet
from sca.libs.build.tasks import Pmd
from sca.libs.sca.configurators.base import GENERATED_SOURCES, JAVA_SOURCES, AnalysisConfigurator
from sca.libs.sca.extension import RulesConfig, StaticCodeAnalysisExtension


class PmdConfigurator(AnalysisConfigurator):
    TOOL = 'pmd'
    TASK_TYPE = Pmd
    PLUGIN_ID = 'pmd'

    def rule_references(self, config: RulesConfig) -> list[str]:
        return list(config.pmd_rules)

    def bind_rules(self, task: Pmd, rule_paths: list[Path]):
        task.rule_sets = list(rule_paths)

    def bind_source_set(
        self, project: Project, extension: StaticCodeAnalysisExtension, task: Pmd, source_set: SourceSet
    ):
        task.set_source(*source_set.java_src_dirs)
        task.include(JAVA_SOURCES)
        task.exclude(GENERATED_SOURCES)
        task.classpath = source_set.output_dirs + source_set.compile_classpath
