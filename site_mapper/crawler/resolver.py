"""
Classification of raw link strings found on a page.

Every decision is made from the shape of the string alone, nothing is fetched.
"""
from __future__ import annotations

from typing import Tuple
from urllib.parse import SplitResult, urlsplit

from site_mapper.crawler.models import WebUrl

__all__ = ("MalformedUrlError", "site_root", "resolve_child_url")

_EXTERNAL_PREFIXES: Tuple[str, ...] = ("http://", "https://", "www.")
_DEFAULT_PORTS = (80, 443)


class MalformedUrlError(ValueError):
    """Raised when a page URL cannot be split into scheme, host and port."""


def _split(page_url: str) -> Tuple[SplitResult, int | None]:
    try:
        parts = urlsplit(page_url)
        port = parts.port
    except ValueError as exc:
        raise MalformedUrlError(page_url) from exc
    if not parts.scheme or not parts.netloc:
        raise MalformedUrlError(page_url)
    return parts, port


def site_root(page_url: str) -> str:
    """Return ``scheme://host[:port]`` of *page_url*.

    The port is kept only when it is given explicitly and is not 80 or 443.
    """
    parts, port = _split(page_url)
    host = parts.netloc.rpartition("@")[2]
    if port is not None or host.endswith(":"):
        host = host[: host.rindex(":")]
    root = f"{parts.scheme}://{host}"
    if port is not None and port not in _DEFAULT_PORTS:
        root += f":{port}"
    return root


def resolve_child_url(page_url: str, child_url: str) -> WebUrl:
    """Turn *child_url*, found on *page_url*, into a classified :class:`WebUrl`.

    Page-relative links are appended to *page_url* as is, without any path
    normalisation.
    """
    try:
        root = site_root(page_url)
        scheme = _split(page_url)[0].scheme
    except MalformedUrlError:
        return WebUrl.not_crawlable(f"{page_url} - malformed url")

    if child_url.startswith(root):
        return WebUrl.crawlable(child_url)
    if child_url.startswith(_EXTERNAL_PREFIXES):
        return WebUrl.not_crawlable(child_url)
    if child_url.startswith("//"):
        return WebUrl.crawlable(f"{scheme}:{child_url}")
    if child_url.startswith("/"):
        return WebUrl.crawlable(root + child_url)
    return WebUrl.crawlable(page_url + child_url)
