"""
Central registry of the analysis tool versions.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from sca.libs.common.color import Color, color_message
from sca.libs.common.version import parse_version

logger = logging.getLogger(__name__)


class ToolVersions:
    """
    Versions used for each tool, defaulting to the known latest one.
    Projects may pin older versions through the tool_versions setting.
    """

    LATEST: ClassVar[dict[str, str]] = {
        'checkstyle': '10.12.4',
        'pmd': '7.7.0',
        'spotbugs': '4.8.3',
        'cpd': '7.7.0',
    }

    UPDATE_INSTRUCTIONS: ClassVar[str] = (
        "Update the '{tool}' entry of tool_versions to {latest} or remove it to use the latest version."
    )

    def __init__(self, overrides: dict[str, str] | None = None):
        self.overrides = dict(overrides or {})
        self._warned: set[str] = set()

    def version(self, tool: str) -> str:
        return self.overrides.get(tool, self.LATEST[tool])

    def is_latest(self, tool: str) -> bool:
        try:
            return parse_version(self.version(tool)) >= parse_version(self.LATEST[tool])
        except ValueError:
            # Not a semantic version, trust the user
            return True

    def update_instructions(self, tool: str) -> str:
        return self.UPDATE_INSTRUCTIONS.format(tool=tool, latest=self.LATEST[tool])

    def warn_if_outdated(self, tool: str) -> bool:
        """Warn once per tool, returns whether a warning was emitted."""
        if tool in self._warned or self.is_latest(tool):
            return False

        self._warned.add(tool)
        logger.warning(
            color_message(
                f"Using an outdated {tool} version ({self.version(tool)}). {self.update_instructions(tool)}",
                Color.ORANGE,
            )
        )
        return True
