"""
Host compatibility layer.

Supported host versions do not expose the same task API. The shim is picked once per
project from the host version, every version dependent call goes through it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from sca.libs.build.project import MINIMUM_HOST_VERSION, Project
from sca.libs.build.tasks import AnalysisTask, Checkstyle
from sca.libs.common.exceptions import UnsupportedHostVersionError
from sca.libs.common.version import is_at_least, parse_version

MODERN_HOST_VERSION = "4.0"


def check_host_version(version: str):
    """Pre-flight check, fails before anything gets wired."""
    try:
        supported = is_at_least(version, MINIMUM_HOST_VERSION)
    except ValueError:
        raise UnsupportedHostVersionError(MINIMUM_HOST_VERSION, version) from None

    if not supported:
        raise UnsupportedHostVersionError(MINIMUM_HOST_VERSION, version)


class HostCompat(ABC):
    EXTENSION_NAME = "scaHostCompat"

    def __init__(self, version: str):
        self.version = version

    @staticmethod
    def for_version(version: str) -> HostCompat:
        check_host_version(version)
        if parse_version(version) >= parse_version(MODERN_HOST_VERSION):
            return ModernHostCompat(version)
        return LegacyHostCompat(version)

    @staticmethod
    def for_project(project: Project) -> HostCompat:
        """The shim is cached on the project, the host version cannot change during a run."""
        compat = project.extensions.get(HostCompat.EXTENSION_NAME)
        if compat is None:
            compat = HostCompat.for_version(project.host_version)
            project.extensions[HostCompat.EXTENSION_NAME] = compat
        return compat

    def configure_xml_report(self, task: AnalysisTask, destination: Path):
        task.reports.xml.enabled = True
        task.reports.xml.destination = destination

    def disable_html_report(self, task: AnalysisTask):
        # Only hosts from 2.10 on generate an html report
        if task.reports.html is not None:
            task.reports.html.enabled = False

    @abstractmethod
    def clear_config_dir(self, task: Checkstyle):
        """Stop the task from tracking the shared config directory."""


class LegacyHostCompat(HostCompat):
    def clear_config_dir(self, task: Checkstyle):
        pass


class ModernHostCompat(HostCompat):
    def clear_config_dir(self, task: Checkstyle):
        # Downloads land in config/checkstyle and must not invalidate the other checkstyle tasks
        task.config_dir = None
