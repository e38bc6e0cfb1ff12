"""Exceptions raised by SiteCrawl components."""

from __future__ import annotations

from typing import Optional


class SiteCrawlError(Exception):
    """Base class for every error raised by the crawler."""


class URLParseError(SiteCrawlError):
    """Raised when a string is not a syntactically valid URL."""

    def __init__(self, url: str, reason: str = "invalid URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot parse URL {url!r}: {reason}")


class SeedURLError(URLParseError):
    """Raised when the seed URL cannot start a crawl. Fatal for the run."""


class FetchError(SiteCrawlError):
    """Raised when a page cannot be retrieved as HTML."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Fetch failed for {url}: {reason}")


class FetchTimeoutError(FetchError):
    """The request did not complete within the configured timeout."""

    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, f"timed out after {timeout:g}s")


class HTTPStatusError(FetchError):
    """The server answered with a status code >= 400."""

    def __init__(self, url: str, status: int):
        self.status = status
        super().__init__(url, f"error response code {status}")


class ContentTypeError(FetchError):
    """The response body is not an HTML document."""

    def __init__(self, url: str, content_type: Optional[str]):
        self.content_type = content_type
        super().__init__(url, f"invalid content type {content_type!r}")


class FetchIOError(FetchError):
    """Transport-level failure: connection, protocol or body decoding."""

    def __init__(self, url: str, original: Exception):
        self.original = original
        super().__init__(url, f"{type(original).__name__}: {original}")


class PageExtractionError(SiteCrawlError):
    """Raised when page data cannot be extracted at all."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot extract page data from {url}: {reason}")


class ReportWriteError(SiteCrawlError):
    """Raised when the report file cannot be written."""

    def __init__(self, path: str, original: Exception):
        self.path = path
        self.original = original
        super().__init__(f"Cannot write report to {path}: {original}")
