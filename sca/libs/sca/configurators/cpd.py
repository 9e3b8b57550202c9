"""
A configurator for CPD, the copy/paste detector. CPD reads no rule file.
"""

from __future__ import annotations

from sca.libs.build.project import Project
from sca.libs.build.sourcesets import AndroidSourceSet, SourceSet
from sca.libs.build.tasks import Cpd
from sca.libs.sca.configurators.base import GENERATED_SOURCES, JAVA_SOURCES, AnalysisConfigurator
from sca.libs.sca.extension import RulesConfig, StaticCodeAnalysisExtension


class CpdConfigurator(AnalysisConfigurator):
    TOOL = 'cpd'
    TASK_TYPE = Cpd

    def rule_references(self, config: RulesConfig) -> list[str]:
        return []

    def bind_source_set(
        self, project: Project, extension: StaticCodeAnalysisExtension, task: Cpd, source_set: SourceSet
    ):
        task.set_source(*source_set.java_src_dirs)
        task.include(JAVA_SOURCES)
        task.exclude(GENERATED_SOURCES)
        task.minimum_token_count = extension.cpd_minimum_tokens

    def bind_android_source_set(
        self, project: Project, extension: StaticCodeAnalysisExtension, task: Cpd, source_set: AndroidSourceSet
    ):
        task.set_source(*source_set.java_src_dirs)
        task.include(JAVA_SOURCES)
        task.exclude(GENERATED_SOURCES)
        task.minimum_token_count = extension.cpd_minimum_tokens
