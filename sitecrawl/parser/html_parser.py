# === FILE: sitecrawl/parser/html_parser.py ===
"""HTML field extraction for SiteCrawl.

Turns a raw HTML document plus the URL it was fetched from into a
:class:`~sitecrawl.crawler.models.PageRecord`:

* heading — text of the first ``<h1>``, or ``""``.
* first paragraph — first ``<p>`` inside ``<main>`` when ``<main>`` has one,
  otherwise the first ``<p>`` of the document, or ``""``.
* outgoing links — every ``<a href>`` in document order, absolute.
* image URLs — every ``<img src>`` in document order, absolute.

Relative references are resolved against the page URL and then rebuilt from
scheme, host and path only: query strings and fragments of discovered links
are dropped.  Duplicates are kept.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Union
from urllib.parse import urljoin, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from sitecrawl.crawler.models import PageRecord
from sitecrawl.crawler.normalizer import parse_url
from sitecrawl.exceptions import PageExtractionError, URLParseError

__all__: Sequence[str] = (
    "get_heading_from_html",
    "get_first_paragraph_from_html",
    "get_urls_from_html",
    "get_images_from_html",
    "extract_page_data",
)

_Markup = Union[str, BeautifulSoup]


def _soup(html: _Markup) -> BeautifulSoup:
    if isinstance(html, BeautifulSoup):
        return html
    return BeautifulSoup(html or "", "html.parser")


def _text(tag: Optional[Tag]) -> str:
    if tag is None:
        return ""
    return " ".join(tag.get_text().split())


def resolve_reference(ref: str, base_url: str) -> Optional[str]:
    """Resolve *ref* against *base_url* as ``scheme://host/path``; None if unparsable."""
    try:
        parts = parse_url(urljoin(base_url, ref.strip()))
    except (URLParseError, ValueError):
        return None
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def _collect(soup: BeautifulSoup, tag_name: str, attr: str, base_url: str) -> list[str]:
    found: list[str] = []
    for tag in soup.find_all(tag_name):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(attr)
        if not isinstance(value, str):
            continue
        resolved = resolve_reference(value, base_url)
        if resolved is not None:
            found.append(resolved)
    return found


def get_heading_from_html(html: _Markup) -> str:
    return _text(_soup(html).find("h1"))


def get_first_paragraph_from_html(html: _Markup) -> str:
    soup = _soup(html)
    main = soup.find("main")
    if isinstance(main, Tag):
        paragraph = main.find("p")
        if paragraph is not None:
            return _text(paragraph)
    return _text(soup.find("p"))


def get_urls_from_html(html: _Markup, base_url: str) -> list[str]:
    """Return absolute URLs of all ``<a href>`` elements in document order."""
    return _collect(_soup(html), "a", "href", base_url)


def get_images_from_html(html: _Markup, base_url: str) -> list[str]:
    """Return absolute URLs of all ``<img src>`` elements in document order."""
    return _collect(_soup(html), "img", "src", base_url)


def extract_page_data(html: str, page_url: str) -> PageRecord:
    """Parse *html* once and build the record for *page_url*.

    Malformed markup degrades to empty fields; only an unparsable
    *page_url* raises :class:`PageExtractionError`.
    """
    try:
        parse_url(page_url)
    except URLParseError as exc:
        raise PageExtractionError(page_url, exc.reason) from exc

    soup = _soup(html)
    return PageRecord(
        url=page_url,
        heading=get_heading_from_html(soup),
        first_paragraph=get_first_paragraph_from_html(soup),
        outgoing_links=tuple(get_urls_from_html(soup, page_url)),
        image_urls=tuple(get_images_from_html(soup, page_url)),
    )
