"""
Link extraction for SiteMapper.

Pulls child pages, stylesheets, scripts and images out of a fetched page and
classifies each of them with :func:`resolve_child_url`.
"""
from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_mapper.crawler.models import PageData, WebUrl
from site_mapper.crawler.resolver import resolve_child_url

__all__ = (
    "PageLinks",
    "LINKS",
    "STYLESHEETS",
    "SCRIPTS",
    "IMAGES",
    "parse_page",
    "select_attribute_values",
    "extract_links",
    "extract_page_links",
)

Query = Tuple[str, str]

LINKS: Query = ("a", "href")
STYLESHEETS: Query = ('link[rel="stylesheet"]', "href")
SCRIPTS: Query = ('script[type="text/javascript"]', "src")
IMAGES: Query = ("img", "src")


class PageLinks(NamedTuple):
    children: List[WebUrl]
    stylesheets: List[WebUrl]
    scripts: List[WebUrl]
    images: List[WebUrl]


def parse_page(content: str) -> BeautifulSoup:
    return BeautifulSoup(content, "html.parser")


def select_attribute_values(document: BeautifulSoup, selector: str, attribute: str) -> List[Optional[str]]:
    """Return *attribute* of every element matching *selector*, in document order.

    Elements without the attribute yield ``None``.
    """
    values: List[Optional[str]] = []
    for tag in document.select(selector):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(attribute)
        values.append(value)
    return values


def _is_fragment(raw: str) -> bool:
    return raw.startswith(("#", "/#"))


def extract_links(page_url: str, document: BeautifulSoup, query: Query) -> List[WebUrl]:
    """Resolve the links matched by *query* and sort them by address."""
    selector, attribute = query
    urls = [
        resolve_child_url(page_url, raw)
        for raw in select_attribute_values(document, selector, attribute)
        if raw and not _is_fragment(raw)
    ]
    return sorted(urls, key=lambda url: url.address)


def extract_page_links(page: PageData) -> PageLinks:
    document = parse_page(page.content)
    return PageLinks(
        children=extract_links(page.url, document, LINKS),
        stylesheets=extract_links(page.url, document, STYLESHEETS),
        scripts=extract_links(page.url, document, SCRIPTS),
        images=extract_links(page.url, document, IMAGES),
    )
