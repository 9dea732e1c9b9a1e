"""URL building utilities for URL shortener."""

import re

_HTTP_PREFIX = re.compile(r"^http")


def build_short_path(short_hash: str, redirector_path: str) -> str:
    """Build the short path handed back to clients.

    Args:
        short_hash: The short hash
        redirector_path: Path segment short hashes live under (e.g. redirect)

    Returns:
        Relative short path, e.g. redirect/a1b2c3d4
    """
    prefix = redirector_path.strip("/")
    if prefix:
        return f"{prefix}/{short_hash}"
    return short_hash


def normalize_redirect_target(original_url: str) -> str:
    """Prepend http:// unless the stored URL already starts with http.

    Args:
        original_url: URL as stored

    Returns:
        Redirect target
    """
    if _HTTP_PREFIX.match(original_url):
        return original_url
    return f"http://{original_url}"
