"""
Entry point of the static code analysis wiring.
"""

from __future__ import annotations

import logging

from sca.libs.build.compat import HostCompat
from sca.libs.build.project import ANDROID_PLUGINS, JAVA_PLUGIN, Project
from sca.libs.common.color import Color, color_message
from sca.libs.sca.configurators.base import AnalysisConfigurator
from sca.libs.sca.configurators.checkstyle import CheckstyleConfigurator
from sca.libs.sca.configurators.cpd import CpdConfigurator
from sca.libs.sca.configurators.pmd import PmdConfigurator
from sca.libs.sca.configurators.spotbugs import SpotBugsConfigurator
from sca.libs.sca.extension import StaticCodeAnalysisExtension

logger = logging.getLogger(__name__)

CONFIGURATORS: dict[str, type[AnalysisConfigurator]] = {
    'spotbugs': SpotBugsConfigurator,
    'checkstyle': CheckstyleConfigurator,
    'pmd': PmdConfigurator,
    'cpd': CpdConfigurator,
}


class StaticCodeAnalysisPlugin:
    def apply(self, project: Project, extension: StaticCodeAnalysisExtension | None = None):
        """
        Register the extension and wire the analysis tasks once the project is evaluated.
        Raises UnsupportedHostVersionError right away on hosts that are too old.
        """
        HostCompat.for_project(project)

        extension = project.extensions.setdefault(
            StaticCodeAnalysisExtension.NAME, extension or StaticCodeAnalysisExtension()
        )
        project.after_evaluate(lambda p: self.configure(p, extension))
        return extension

    def configure(self, project: Project, extension: StaticCodeAnalysisExtension):
        if any(project.plugins.has_plugin(plugin_id) for plugin_id in ANDROID_PLUGINS):
            for tool in extension.enabled_tools():
                CONFIGURATORS[tool]().apply_android_config(project, extension)
        elif project.plugins.has_plugin(JAVA_PLUGIN):
            for tool in extension.enabled_tools():
                CONFIGURATORS[tool]().apply_config(project, extension)
        else:
            logger.warning(
                color_message(
                    f"Project {project.name} applies neither the java nor an android plugin, nothing to analyze.",
                    Color.ORANGE,
                )
            )
