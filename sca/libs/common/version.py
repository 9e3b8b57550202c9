from __future__ import annotations

import semver


def parse_version(version: str) -> semver.Version:
    """
    Parse a possibly short version ('2.5', '4') as a semantic version.
    Raises ValueError when the string is not a version at all.
    """
    return semver.Version.parse(version.strip(), optional_minor_and_patch=True)


def is_at_least(version: str, minimum: str) -> bool:
    return parse_version(version) >= parse_version(minimum)
