# sitecrawl/crawler/normalizer.py
"""
URL parsing and normalization used for page deduplication.
"""
from __future__ import annotations

import re
from urllib.parse import SplitResult, urlsplit

from sitecrawl.exceptions import URLParseError

__all__ = ("parse_url", "normalize_url", "url_host")

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def parse_url(url: str) -> SplitResult:
    """
    Split *url* into its components, raising URLParseError if it is malformed.

    Rejects control characters, broken percent-escapes, whitespace in the
    host, unbalanced IPv6 brackets and invalid ports.
    """
    if not isinstance(url, str):
        raise URLParseError(repr(url), "not a string")
    match = _CONTROL_RE.search(url)
    if match:
        raise URLParseError(url, f"invalid character {match.group()!r}")
    if _BAD_ESCAPE_RE.search(url):
        raise URLParseError(url, "invalid percent-escape")
    try:
        parts = urlsplit(url)
        # .port validates the port lazily
        parts.port
    except ValueError as exc:
        raise URLParseError(url, str(exc)) from exc
    if " " in parts.netloc:
        raise URLParseError(url, "invalid character in host")
    return parts


def url_host(url: str) -> str:
    """Return the host component (``host[:port]``) of *url*."""
    return parse_url(url).netloc


def normalize_url(url: str) -> str:
    """
    Return the deduplication key for *url*: ``host + "/" + path``.

    Leading and trailing slashes of the path are trimmed; scheme, query
    and fragment are discarded, so ``https://a.test/x/`` and
    ``http://a.test/x?q=1#top`` both map to ``a.test/x``.
    """
    parts = parse_url(url)
    return f"{parts.netloc}/{parts.path.strip('/')}"
