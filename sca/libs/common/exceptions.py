"""Exceptions raised while configuring or running the analysis task graph."""

from __future__ import annotations

from sca.libs.common.color import Color, color_message


class ScaError(Exception):
    """Base class for every error raised by the sca library."""


class ConfigurationError(ScaError):
    """A configuration file is missing or cannot be understood."""


class UnsupportedHostVersionError(ScaError):
    def __init__(self, minimum: str, current: str):
        super().__init__(f"Host version should be {minimum} or higher. Current version: {current}")
        self.minimum = minimum
        self.current = current


class DuplicateTaskError(ScaError):
    def __init__(self, name: str):
        super().__init__(f"Cannot add task '{name}' as a task with that name already exists.")
        self.name = name


class UnknownTaskError(ScaError):
    def __init__(self, name: str):
        super().__init__(f"Task with name '{name}' not found.")
        self.name = name


class TaskNameCollisionError(ScaError):
    """Two different (tool, source set) keys were mapped to the same task name."""

    def __init__(self, name: str, owner: tuple[str, ...], requested: tuple[str, ...]):
        super().__init__(
            f"Task name '{name}' is used by {owner} and cannot be reused for {requested}. "
            "Rename one of the source sets."
        )
        self.name = name
        self.owner = owner
        self.requested = requested


class TaskCycleError(ScaError):
    def __init__(self, cycle: list[str]):
        super().__init__(f"Circular dependency between the following tasks: {' -> '.join(cycle)}")
        self.cycle = cycle


class TaskExecutionError(ScaError):
    """One or more tasks failed during execution."""

    def __init__(self, failures: dict[str, BaseException], skipped: list[str] | None = None):
        self.failures = failures
        self.skipped = skipped or []
        super().__init__(self.summary())

    def summary(self) -> str:
        lines = [f"{len(self.failures)} task(s) failed:"]
        for name, error in self.failures.items():
            lines.append(f"  - {name}: {error}")
        if self.skipped:
            lines.append(f"Skipped because of failed dependencies: {', '.join(self.skipped)}")
        return "\n".join(lines)

    def pretty_print(self) -> str:
        return color_message(self.summary(), Color.RED)
