"""
Input Validators

This module provides the field checks applied to every draft entry
before a batch is registered. Each returns a bool so callers can
collect all failures of a batch at once.
"""

import re
from typing import Any
from urllib.parse import urlparse

SHORTCODE_PATTERN = re.compile(r"^[A-Za-z0-9_-]{4,20}$")

# Single-segment paths served by the app itself; a record using one of these
# could never be reached through the redirect route
RESERVED_SHORTCODES = frozenset({"docs", "redoc", "health", "shorturls"})

# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")


def is_valid_url(url: str) -> bool:
    """
    Check that a string parses as an absolute URL.

    An absolute URL here has a scheme and a network location, so
    "https://example.com" passes while "not-a-url", "example.com"
    and "http://" do not.

    Args:
        url: The URL string to validate

    Returns:
        True if the URL is absolute, False otherwise
    """
    if not url or not isinstance(url, str):
        return False

    if url != url.strip() or any(ch.isspace() for ch in url):
        return False

    try:
        result = urlparse(url)
        # Accessing .port raises ValueError for out-of-range or non-numeric ports
        result.port
    except ValueError:
        return False

    if not result.scheme or not _SCHEME_PATTERN.match(result.scheme):
        return False

    return bool(result.hostname)


def is_valid_shortcode(shortcode: str) -> bool:
    """Shortcodes are 4-20 characters of [A-Za-z0-9_-]."""
    if not isinstance(shortcode, str):
        return False
    return SHORTCODE_PATTERN.match(shortcode) is not None


def is_reserved_shortcode(shortcode: str) -> bool:
    """True for codes that collide with the app's own routes."""
    return shortcode in RESERVED_SHORTCODES


def is_valid_validity(minutes: Any) -> bool:
    """Validity must be a positive integer number of minutes."""
    # bool is a subclass of int
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        return False
    return minutes > 0


def normalize_shortcode(shortcode: Any) -> Any:
    """
    Normalize an optional custom shortcode.

    Blank strings mean "generate one for me" and come back as None.
    Non-string values are returned unchanged for validation to reject.
    """
    if not isinstance(shortcode, str):
        return shortcode
    shortcode = shortcode.strip()
    return shortcode or None
