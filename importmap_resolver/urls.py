"""URL classification helpers.

The standard library has no WHATWG URL parser. These helpers wrap
urllib.parse with the subset of WHATWG rules that import map validation
and resolution depend on: a URL needs a scheme, special schemes need a
usable host, and ports must be in range.
"""

import re
from urllib.parse import SplitResult
from urllib.parse import urlsplit

# Base used to check that relative and path-absolute addresses are well formed
NEUTRAL_BASE_URL = "http://example.com"

# Special schemes with a tuple origin, and their default ports
SPECIAL_SCHEME_PORTS: dict[str, int] = {
    "ftp": 21,
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}

_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z\d+.-]*:")

# scheme://[username[:password]@]host[:port][/path][?query][#fragment]
_ORIGIN_PATTERN = re.compile(
    r"[a-zA-Z][a-zA-Z\d+.-]*://"
    r"(?:[a-zA-Z\d._~!$&'()*+,;=%-]*(?::[a-zA-Z\d._~!$&'()*+,;=%-]*)?@)?"
    r"[a-zA-Z\d.-]+(?::[0-9]+)?(?:/.*)?"
)

_FORBIDDEN_HOST_CHARS = frozenset("\x00\t\n\r #%/:<>?@[\\]^|\x7f")


def parse_url(value: str) -> SplitResult:
    """Parse an absolute URL.

    Args:
        value: Candidate URL string

    Returns:
        Split URL components

    Raises:
        ValueError: Value has no scheme, an unusable host, or an invalid port
    """
    if not _SCHEME_PATTERN.match(value):
        raise ValueError(f"Missing URL scheme: {value!r}")

    parts = urlsplit(value)

    if parts.scheme in SPECIAL_SCHEME_PORTS:
        host = parts.hostname
        if not host:
            raise ValueError(f"URL has an empty host: {value!r}")
        # Bracketed IPv6 literals are checked by urlsplit itself
        if "[" not in parts.netloc and any(char in _FORBIDDEN_HOST_CHARS for char in host):
            raise ValueError(f"URL host contains forbidden characters: {value!r}")

    # Accessing .port validates it (digits only, 0-65535)
    _ = parts.port
    return parts


def is_full_url(value: str) -> bool:
    """Check whether value parses as an absolute URL."""
    try:
        parse_url(value)
    except ValueError:
        return False
    return True


def parses_against_base(value: str, base: str = NEUTRAL_BASE_URL) -> bool:
    """Check whether value resolves to a URL against base.

    Absolute values must parse on their own, scheme-relative values
    (//host/path) take the base scheme, and path values always resolve.
    """
    if _SCHEME_PATTERN.match(value):
        return is_full_url(value)
    if value.startswith("//"):
        return is_full_url(f"{urlsplit(base).scheme}:{value}")
    return True


def has_valid_origin(value: str) -> bool:
    """Check whether value is a URL with a full origin (scheme, host, optional port)."""
    return _ORIGIN_PATTERN.fullmatch(value) is not None


def url_origin(parts: SplitResult) -> str | None:
    """Serialize the origin of a parsed URL.

    Returns:
        scheme://host[:port] for special schemes, None for opaque origins
        (file: and non-special schemes)
    """
    default_port = SPECIAL_SCHEME_PORTS.get(parts.scheme)
    host = parts.hostname
    if default_port is None or not host:
        return None

    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != default_port:
        return f"{parts.scheme}://{host}:{port}"
    return f"{parts.scheme}://{host}"


def is_relative_url(value: str) -> bool:
    """Check for ./ or ../ relative specifiers."""
    return value.startswith("./") or value.startswith("../")


def is_bare_specifier(value: str) -> bool:
    """Check for bare specifiers (package names).

    A bare specifier is not path-absolute, not relative, and not a URL
    with an origin.
    """
    return not value.startswith("/") and not is_relative_url(value) and not has_valid_origin(value)
