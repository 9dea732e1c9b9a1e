"""Validation utilities for URL shortener."""

import re

# Optional http(s) scheme, dotted domain ending in a 2-6 char top-level label,
# optional path-ish tail and trailing slash. Lenient by intent.
_URL_PATTERN = re.compile(
    r"(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)/?",
    re.ASCII,
)


def is_valid_url(url: str) -> bool:
    """Check whether input looks like a web URL.

    Accepts bare domains ("example.com/page") as well as http/https URLs.
    This is a pattern match, not an RFC 3986 parser.

    Args:
        url: The URL to validate

    Returns:
        True if the URL is acceptable
    """
    if not url or not isinstance(url, str):
        return False
    return _URL_PATTERN.fullmatch(url) is not None
