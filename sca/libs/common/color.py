"""
Console colors of the task output.
"""

from __future__ import annotations

import os


class Color:
    BLUE = "blue"
    GREEN = "green"
    ORANGE = "orange"
    RED = "red"
    GREY = "grey"
    BOLD = "bold"


ENDC = "\33[0m"

COLORS = {
    Color.BLUE: "\033[94m",
    Color.GREEN: "\033[92m",
    Color.ORANGE: "\033[93m",
    Color.RED: "\033[91m",
    Color.GREY: "\033[37m",
    Color.BOLD: "\33[1m",
}

# Outcome of a task run, as printed next to its name
TASK_OUTCOMES = {
    None: Color.BLUE,
    "FAILED": Color.RED,
    "SKIPPED": Color.GREY,
}


def color_message(message: str, color: str) -> str:
    """Wrap message in the color escape codes, unless NO_COLOR is set (https://no-color.org)."""
    if os.environ.get("NO_COLOR") or color not in COLORS:
        return message
    return f"{COLORS[color]}{message}{ENDC}"


def task_status(name: str, outcome: str | None = None) -> str:
    """'> Task :checkstyleMain FAILED' line of the executor."""
    suffix = f" {outcome}" if outcome else ""
    return color_message(f"> Task :{name}{suffix}", TASK_OUTCOMES.get(outcome, Color.BOLD))
