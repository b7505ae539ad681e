"""Unicode spoofing checks for URLs.

Flags characters that can make a URL render differently from what it
resolves to: invisible code points, bidirectional controls, mixed
scripts, known Latin look-alikes, and supplementary-plane characters.
"""

import re
from typing import NamedTuple


class Homograph(NamedTuple):
    """A character that renders like a Latin letter."""

    looks_like: str
    name: str


HOMOGRAPHS: dict[str, Homograph] = {
    # Cyrillic
    "\u0430": Homograph("a", "Cyrillic small letter a"),
    "\u043E": Homograph("o", "Cyrillic small letter o"),
    "\u0440": Homograph("p", "Cyrillic small letter er"),
    "\u0435": Homograph("e", "Cyrillic small letter ie"),
    "\u0443": Homograph("y", "Cyrillic small letter u"),
    "\u0445": Homograph("x", "Cyrillic small letter ha"),
    # Greek
    "\u03BF": Homograph("o", "Greek small letter omicron"),
    "\u03B1": Homograph("a", "Greek small letter alpha"),
}

_INVISIBLE_CHARS = re.compile("[\u200B-\u200F\u2028\u2029\u202A-\u202E\u2060-\u2064\u206A-\u206F\uFEFF]")
_BIDI_CONTROL_CHARS = re.compile("[\u202A-\u202E\u2066-\u2069]")

_SCRIPT_PATTERNS: dict[str, re.Pattern[str]] = {
    "Latin": re.compile("[A-Za-z]"),
    "Cyrillic": re.compile("[\u0400-\u04FF]"),
    "Greek": re.compile("[\u0370-\u03FF]"),
    "Arabic": re.compile("[\u0600-\u06FF]"),
    "Hebrew": re.compile("[\u0590-\u05FF]"),
}

_FIRST_SUPPLEMENTARY_CODE_POINT = 0x10000


def detect_scripts(value: str) -> list[str]:
    """Return the names of the tracked scripts that occur in value."""
    return [script for script, pattern in _SCRIPT_PATTERNS.items() if pattern.search(value)]


def scan_unicode_security(value: str) -> list[str]:
    """Scan a URL for Unicode spoofing hazards.

    Every finding is reported separately, so one value can produce
    several issues. Positions count code points, not UTF-16 units.

    Args:
        value: URL or address to scan

    Returns:
        Issue descriptions, empty when nothing suspicious was found
    """
    issues: list[str] = []

    if _INVISIBLE_CHARS.search(value):
        issues.append("contains invisible or zero-width Unicode characters")

    if _BIDI_CONTROL_CHARS.search(value):
        issues.append("contains bidirectional text control characters that could be used for spoofing")

    if len(detect_scripts(value)) > 1:
        issues.append("contains mixed scripts that could indicate a homograph attack")

    for position, char in enumerate(value):
        code = ord(char)

        homograph = HOMOGRAPHS.get(char)
        if homograph:
            issues.append(
                f"contains '{char}' (U+{code:04X}, {homograph.name}) at position {position} "
                f"which looks like '{homograph.looks_like}' but is a different Unicode character"
            )

        if code >= _FIRST_SUPPLEMENTARY_CODE_POINT:
            issues.append(
                f"contains high Unicode character '{char}' (U+{code:X}) at position {position} "
                "which is unusual in URLs"
            )

    return issues
