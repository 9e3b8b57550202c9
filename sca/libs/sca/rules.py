"""
Classification of configured rule file references.
"""

from __future__ import annotations

from dataclasses import dataclass

REMOTE_PREFIXES = ("http://", "https://")


@dataclass(frozen=True)
class Local:
    path: str


@dataclass(frozen=True)
class Remote:
    url: str


RuleLocation = Local | Remote


def is_remote_location(reference: str) -> bool:
    return reference.startswith(REMOTE_PREFIXES)


def classify(reference: str) -> RuleLocation:
    """
    Anything that is not an http(s) URL is a local path, malformed strings included.
    The analysis tool reports missing local files when it runs.
    """
    if is_remote_location(reference):
        return Remote(reference)
    return Local(reference)
