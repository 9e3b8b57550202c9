"""
Miscellaneous functions, no tasks here
"""

from __future__ import annotations

import re

WORD_SEPARATOR = re.compile(r"[^0-9A-Za-z]+")


def lower_camel_case(*parts: str) -> str:
    """
    Join the given parts into a single lower camel case identifier.

    Every word keeps its inner casing, only its first letter is upper-cased:
    lower_camel_case('downloadCheckstyleXml', 'test') == 'downloadCheckstyleXmlTest'
    """
    words = [word for part in parts for word in WORD_SEPARATOR.split(part) if word]
    if not words:
        return ""

    camel = "".join(word[0].upper() + word[1:] for word in words)
    return camel[0].lower() + camel[1:]


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]
