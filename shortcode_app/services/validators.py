"""
Input validators for batch creation.

All predicates are pure and never raise; callers decide what a failed check
means.
"""

import re
from urllib.parse import urlsplit

SHORTCODE_MIN_LENGTH = 3
SHORTCODE_MAX_LENGTH = 20

_URL_PATTERN = re.compile(r'^https?://.+', re.IGNORECASE)
_SHORTCODE_PATTERN = re.compile(r'[A-Za-z0-9]+')
_WHITESPACE = re.compile(r'\s')


def is_valid_url(url: str) -> bool:
    """
    Check that `url` is an http(s) URL with a usable host.

    The scheme is matched case-insensitively. Beyond the scheme the URL must
    parse with a non-empty host, no whitespace in the authority, and a
    numeric port if one is given.
    """
    if not url or not isinstance(url, str):
        return False

    if not _URL_PATTERN.match(url):
        return False

    try:
        parts = urlsplit(url)
        # Accessing .port validates it
        parts.port
    except ValueError:
        return False

    if not parts.netloc or not parts.hostname:
        return False

    if _WHITESPACE.search(parts.netloc):
        return False

    return True


def is_valid_shortcode(shortcode: str) -> bool:
    """Check that a custom shortcode is 3-20 ASCII letters or digits."""
    if not shortcode or not isinstance(shortcode, str):
        return False
    return (
        _SHORTCODE_PATTERN.fullmatch(shortcode) is not None
        and SHORTCODE_MIN_LENGTH <= len(shortcode) <= SHORTCODE_MAX_LENGTH
    )


def is_valid_validity(minutes) -> bool:
    """Check that a validity period is a positive whole number of minutes."""
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        return False
    return minutes > 0
