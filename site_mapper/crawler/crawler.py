from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Set

from site_mapper.crawler.fetcher import USER_AGENT, Fetcher
from site_mapper.crawler.link_extractor import extract_page_links
from site_mapper.crawler.models import FailureKind, FetchFailure, FetchResult, WebUrl
from site_mapper.crawler.site_map import SiteMap
from site_mapper.logger import logger

__all__ = ("PageFetcher", "SiteMapCrawler", "add_protocol")

DEFAULT_MAX_SEARCH_DEPTH = 1


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> FetchResult: ...


def add_protocol(url: str) -> str:
    """Prefix ``http://`` unless *url* already starts with http:// or https://."""
    if url.startswith(("http://", "https://")):
        return url
    return "http://" + url


class SiteMapCrawler:
    """Depth-first site map builder.

    Fetches one page at a time. Static resources of a page are listed right
    after it, then its crawlable children are visited, then its external
    links are listed. Every call of :meth:`crawl` gets its own visited set
    and buffer, so one instance can serve several calls.
    """

    def __init__(
        self,
        page_timeout_millis: int,
        max_search_depth: int = DEFAULT_MAX_SEARCH_DEPTH,
        *,
        user_agent: str = USER_AGENT,
        fetcher: Optional[PageFetcher] = None,
    ) -> None:
        self.page_timeout_millis = page_timeout_millis
        self.max_search_depth = max_search_depth
        self.user_agent = user_agent
        self._fetcher = fetcher

    def create_site_map(self, base_url: Optional[str]) -> str:
        """Blocking wrapper around :meth:`crawl`."""
        return asyncio.run(self.crawl(base_url))

    async def crawl(self, base_url: Optional[str]) -> str:
        if not base_url:
            raise ValueError("Base URL should not be empty.")

        root = WebUrl.crawlable(add_protocol(base_url))
        visited: Set[str] = set()
        site_map = SiteMap()
        logger.info("Crawl started: %s (max depth %d)", root.address, self.max_search_depth)

        if self._fetcher is not None:
            await self._visit(self._fetcher, root, 0, visited, site_map)
        else:
            async with Fetcher.open_session(self.user_agent) as session:
                fetcher = Fetcher(session, self.page_timeout_millis / 1000)
                await self._visit(fetcher, root, 0, visited, site_map)

        logger.info("Crawl finished: %d pages visited", len(visited))
        return site_map.text()

    async def _visit(
        self,
        fetcher: PageFetcher,
        url: WebUrl,
        depth: int,
        visited: Set[str],
        site_map: SiteMap,
    ) -> None:
        address = url.address
        if address in visited:
            return
        # not marked visited, a shallower reference may still reach it
        if depth > self.max_search_depth:
            return

        logger.info("[%d] %s", depth, address)
        visited.add(address)

        result = await fetcher.fetch(address)
        if isinstance(result, FetchFailure):
            line = result.describe(address)
            if result.kind is FailureKind.OTHER:
                logger.error(line)
            else:
                logger.warning(line)
            site_map.append_line(line)
            return

        links = extract_page_links(result)

        site_map.append_line(address)
        site_map.extend(links.stylesheets)
        site_map.extend(links.scripts)
        site_map.extend(links.images)

        for child in links.children:
            if child.is_crawlable:
                await self._visit(fetcher, child, depth + 1, visited, site_map)

        site_map.extend(child for child in links.children if not child.is_crawlable)
