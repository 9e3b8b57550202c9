"""
A configurator for SpotBugs tasks.

SpotBugs analyzes compiled classes, so besides the sources it needs the class output
of the source set and, for best results, all the classes it references.
"""

from __future__ import annotations

from pathlib import Path

from sca.libs.build.project import Project
from sca.libs.build.sourcesets import AndroidSourceSet, SourceSet
from sca.libs.build.tasks import SpotBugs
from sca.libs.sca.configurators.base import JAVA_SOURCES, AnalysisConfigurator, variant_classpath
from sca.libs.sca.extension import RulesConfig, StaticCodeAnalysisExtension

PLUGINS_CONFIGURATION = 'spotbugsPlugins'
MOCKABLE_ANDROID_JAR_TASK = 'mockableAndroidJar'

# Classes generated by the android build
GENERATED_CLASSES = [
    '**/R.class',
    '**/R$*.class',
    '**/Manifest.class',
    '**/Manifest$*.class',
    '**/BuildConfig.class',
    '**/BuildConfig$*.class',
]


class SpotBugsConfigurator(AnalysisConfigurator):
    TOOL = 'spotbugs'
    TASK_TYPE = SpotBugs
    PLUGIN_ID = 'spotbugs'

    def setup_plugin(self, project: Project, extension: StaticCodeAnalysisExtension):
        super().setup_plugin(project, extension)
        project.configurations.maybe_create(PLUGINS_CONFIGURATION)

    def rule_references(self, config: RulesConfig) -> list[str]:
        return [config.spotbugs_exclude] if config.spotbugs_exclude else []

    def bind_rules(self, task: SpotBugs, rule_paths: list[Path]):
        task.exclude_filter = rule_paths[0] if rule_paths else None

    def bind_source_set(
        self, project: Project, extension: StaticCodeAnalysisExtension, task: SpotBugs, source_set: SourceSet
    ):
        self._bind_common(project, task, source_set.java_src_dirs)
        task.classes_dirs = list(source_set.output_dirs)
        task.classpath = list(source_set.compile_classpath)

    def bind_android_source_set(
        self,
        project: Project,
        extension: StaticCodeAnalysisExtension,
        task: SpotBugs,
        source_set: AndroidSourceSet,
    ):
        self._bind_common(project, task, source_set.java_src_dirs)
        intermediates = project.build_dir / 'intermediates'
        task.classes_dirs = [intermediates / 'classes' / source_set.name]
        task.class_excludes = list(GENERATED_CLASSES)

        # SpotBugs needs the android SDK classes too, through the mockable jar
        mockable_jar = project.tasks.find_by_name(MOCKABLE_ANDROID_JAR_TASK)
        if mockable_jar is not None:
            task.depends_on(mockable_jar)
        classpath = variant_classpath(project, source_set)
        classpath += sorted(intermediates.glob('mockable-android-*.jar'))
        classpath += sorted((intermediates / 'exploded-aar').glob('**/*.jar'))
        task.classpath = classpath

    def _bind_common(self, project: Project, task: SpotBugs, source_dirs: list[Path]):
        task.set_source(*source_dirs)
        task.include(JAVA_SOURCES)
        task.effort = 'max'
        task.plugin_classpath = project.configurations[PLUGINS_CONFIGURATION].files
