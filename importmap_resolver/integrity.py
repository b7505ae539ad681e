"""Subresource integrity (SRI) metadata format checks.

Only the format is checked. Hashes are never computed or compared.
"""

import re

SRI_ALGORITHMS = ("sha256", "sha384", "sha512")

_ALGORITHM = "(?:" + "|".join(SRI_ALGORITHMS) + ")"
_HASH_TOKEN = rf"{_ALGORITHM}-[A-Za-z0-9+/]+=*"
_SRI_PATTERN = re.compile(rf"{_HASH_TOKEN}(?:\s+{_HASH_TOKEN})*")


def is_valid_integrity_value(value: str) -> bool:
    """Check that value is one or more space separated `<algorithm>-<base64>` tokens.

    Example:
        >>> is_valid_integrity_value("sha384-oqVuAfXRKap7fdgcCY5uykM6+R9GqQ8K")
        True
        >>> is_valid_integrity_value("md5-abc123")
        False
    """
    return _SRI_PATTERN.fullmatch(value.strip()) is not None
