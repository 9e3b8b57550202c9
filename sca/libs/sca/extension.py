"""Settings of the static code analysis plugin, project wide and per source set."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

import yaml

from sca.libs.build.sourcesets import NamedDomainObjectContainer
from sca.libs.common.exceptions import ConfigurationError

DEFAULT_CHECKSTYLE_RULES = "config/checkstyle/checkstyle.xml"
DEFAULT_PMD_RULES = ["config/pmd/pmd.xml"]
DEFAULT_SPOTBUGS_EXCLUDE = "config/spotbugs/excludeFilter.xml"
DEFAULT_CPD_MINIMUM_TOKENS = 100


@dataclass
class RulesConfig:
    """Rule files of one source set. Remote rule files are given as http(s) URLs."""

    name: str
    checkstyle_rules: str = DEFAULT_CHECKSTYLE_RULES
    pmd_rules: list[str] = field(default_factory=lambda: list(DEFAULT_PMD_RULES))
    spotbugs_exclude: str = DEFAULT_SPOTBUGS_EXCLUDE
    # Keep going when violations are found, reports are the source of truth
    ignore_errors: bool = True

    RULE_KEYS: ClassVar[tuple[str, ...]] = ('checkstyle_rules', 'pmd_rules', 'spotbugs_exclude', 'ignore_errors')

    def update(self, data: dict[str, Any]):
        for key, value in data.items():
            if key not in self.RULE_KEYS:
                raise ConfigurationError(f"Unknown setting '{key}' for source set '{self.name}'")
            setattr(self, key, _coerce(key, value))


@dataclass
class StaticCodeAnalysisExtension:
    """
    Usage:
        The extension is read from a sca.yml file, every key being optional:
        > checkstyle: true
        > pmd: true
        > spotbugs: true
        > cpd: true
        > ignore_errors: true
        > checkstyle_rules: https://example.com/checkstyle.xml
        > pmd_rules: [config/pmd/pmd.xml]
        > spotbugs_exclude: config/spotbugs/excludeFilter.xml
        > cpd_minimum_tokens: 100
        > tool_versions:
        >   checkstyle: 8.45.1
        > source_sets:
        >   test:
        >     checkstyle_rules: config/checkstyle/checkstyle-test.xml
        >     ignore_errors: false

        Source sets without an entry use the project wide rules.
    """

    NAME: ClassVar[str] = 'staticCodeAnalysis'
    FILE_NAME: ClassVar[str] = 'sca.yml'

    checkstyle: bool = True
    pmd: bool = True
    spotbugs: bool = True
    cpd: bool = True
    ignore_errors: bool = True
    checkstyle_rules: str = DEFAULT_CHECKSTYLE_RULES
    pmd_rules: list[str] = field(default_factory=lambda: list(DEFAULT_PMD_RULES))
    spotbugs_exclude: str = DEFAULT_SPOTBUGS_EXCLUDE
    cpd_minimum_tokens: int = DEFAULT_CPD_MINIMUM_TOKENS
    tool_versions: dict[str, str] = field(default_factory=dict)
    source_set_config: NamedDomainObjectContainer[RulesConfig] = field(init=False, repr=False)

    def __post_init__(self):
        self.source_set_config = NamedDomainObjectContainer(self._new_rules_config)

    def _new_rules_config(self, name: str) -> RulesConfig:
        # Copies of the current project wide values, so later changes to one source set stay local
        return RulesConfig(
            name,
            checkstyle_rules=self.checkstyle_rules,
            pmd_rules=list(self.pmd_rules),
            spotbugs_exclude=self.spotbugs_exclude,
            ignore_errors=self.ignore_errors,
        )

    def enabled_tools(self) -> list[str]:
        return [tool for tool in ('spotbugs', 'checkstyle', 'pmd', 'cpd') if getattr(self, tool)]

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StaticCodeAnalysisExtension:
        data = dict(data or {})
        source_sets = data.pop('source_sets', None) or {}

        known = {f.name for f in fields(cls) if f.init}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown settings in {cls.FILE_NAME}: {', '.join(sorted(unknown))}")

        extension = cls(**{key: _coerce(key, value) for key, value in data.items()})
        for name, rules in source_sets.items():
            extension.source_set_config.maybe_create(str(name)).update(rules or {})

        return extension

    @classmethod
    def from_file(cls, path: str | Path) -> StaticCodeAnalysisExtension:
        try:
            with open(path) as file:
                data = yaml.safe_load(file)
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {path}") from None
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML configuration: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping of settings")

        return cls.from_dict(data)


def _coerce(key: str, value: Any) -> Any:
    if key == 'pmd_rules':
        return [str(rule) for rule in ([value] if isinstance(value, str) else value or [])]
    if key == 'tool_versions':
        if not isinstance(value, dict):
            raise ConfigurationError("tool_versions must be a mapping of tool name to version")
        return {str(tool): str(version) for tool, version in value.items()}
    if key in ('checkstyle', 'pmd', 'spotbugs', 'cpd', 'ignore_errors'):
        if not isinstance(value, bool):
            raise ConfigurationError(f"{key} must be a boolean, got {value!r}")
        return value
    if key == 'cpd_minimum_tokens':
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(f"{key} must be a strictly positive integer, got {value!r}")
        return value
    return str(value)
