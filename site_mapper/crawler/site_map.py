"""
Append-only text buffer holding the site map while it is being built.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from site_mapper.crawler.models import WebUrl

NEW_LINE = "\n"


class SiteMap:
    """Ordered lines of a site map, in traversal order."""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def append_line(self, line: str) -> None:
        self._parts.append(line + NEW_LINE)

    def extend(self, urls: Iterable[Optional[WebUrl]]) -> None:
        """Add *urls* one per line; an empty list adds nothing."""
        urls = list(urls)
        if not urls:
            return
        addresses = [u.address for u in urls if u is not None and u.address is not None]
        self._parts.append(NEW_LINE.join(addresses) + NEW_LINE)

    def text(self) -> str:
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.text()
