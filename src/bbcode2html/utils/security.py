#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/utils/security.py
"""URL safety checks for link and image targets.

Every URL that reaches an ``href`` or ``src`` attribute passes through
``sanitize_url`` first. Escaping stops attribute breakout; these checks stop
script-bearing schemes that stay harmful even when perfectly escaped.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

from bbcode2html.constants import DANGEROUS_SCHEMES, SAFE_IMAGE_SCHEMES, SAFE_LINK_SCHEMES

logger = logging.getLogger(__name__)

# Browsers drop these anywhere in a URL, so "java\tscript:" is still javascript:
_IGNORED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]")
_WHITESPACE = re.compile(r"\s")


def is_relative_url(url: str) -> bool:
    """Check if a URL is relative (no scheme or authority).

    Examples
    --------
    >>> is_relative_url("/path/to/file")
    True
    >>> is_relative_url("https://example.com")
    False

    """
    if not url or not url.strip():
        return True
    return url.strip().startswith(("#", "/", "./", "../", "?")) and not url.strip().startswith("//")


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a dangerous scheme.

    Dangerous schemes include javascript:, vbscript:, data:text/html, and
    others that can run script when followed.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL uses a dangerous scheme, False otherwise

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("JavaScript:alert(1)")
    True
    >>> is_url_scheme_dangerous("java\\tscript:alert(1)")
    True

    """
    if not url or not url.strip():
        return False

    collapsed = _IGNORED_URL_CHARS.sub("", url).lower()
    if is_relative_url(collapsed):
        return False

    for dangerous_scheme in DANGEROUS_SCHEMES:
        if collapsed.startswith(dangerous_scheme):
            return True

    try:
        scheme = urlparse(collapsed).scheme
    except ValueError:
        # Malformed authority such as an unbalanced IPv6 bracket
        return True
    return scheme in ("javascript", "vbscript", "about", "data") and not collapsed.startswith("data:image/")


def _url_scheme(url: str) -> str:
    """Return the lowercase scheme of ``url``, or "" when it has none.

    ``example.com:8080/x`` is host-and-port, not a scheme, so a candidate
    scheme containing a dot is treated as no scheme.
    """
    scheme = urlparse(url).scheme.lower()
    if "." in scheme:
        return ""
    return scheme


def is_url_safe(url: str, allowed_schemes: frozenset[str] = SAFE_LINK_SCHEMES) -> bool:
    """Check if a URL is safe to place in a link or image attribute.

    A URL is safe when it contains no whitespace or control characters, does
    not use a dangerous scheme, and its scheme (if any) is in
    ``allowed_schemes``.

    Parameters
    ----------
    url : str
        URL to validate
    allowed_schemes : frozenset of str
        Permitted schemes; "" permits scheme-less URLs such as ``example.com``

    Returns
    -------
    bool
        True if the URL may be emitted

    Examples
    --------
    >>> is_url_safe("https://example.com")
    True
    >>> is_url_safe("javascript:alert('xss')")
    False

    """
    if not url:
        return False
    if _WHITESPACE.search(url) or _IGNORED_URL_CHARS.search(url):
        return False
    if is_url_scheme_dangerous(url):
        return False
    try:
        return _url_scheme(url) in allowed_schemes
    except ValueError:
        return False


def sanitize_url(url: str, allowed_schemes: frozenset[str] = SAFE_LINK_SCHEMES) -> str | None:
    """Return the trimmed URL when safe, otherwise None.

    Examples
    --------
    >>> sanitize_url("  https://example.com ")
    'https://example.com'
    >>> sanitize_url("javascript:alert('xss')") is None
    True

    """
    candidate = url.strip()
    if not is_url_safe(candidate, allowed_schemes):
        logger.debug("Rejected unsafe URL: %r", candidate[:80])
        return None
    return candidate


def sanitize_image_url(url: str) -> str | None:
    """Return the trimmed image URL when safe, otherwise None."""
    return sanitize_url(url, SAFE_IMAGE_SCHEMES)


__all__ = [
    "is_relative_url",
    "is_url_scheme_dangerous",
    "is_url_safe",
    "sanitize_url",
    "sanitize_image_url",
]
