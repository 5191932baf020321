"""site_mapper.crawler: URL resolution, link extraction and depth-first traversal."""

from .crawler import SiteMapCrawler
from .models import FailureKind, FetchFailure, PageData, WebUrl
from .resolver import resolve_child_url

__all__ = [
    "SiteMapCrawler",
    "WebUrl",
    "PageData",
    "FetchFailure",
    "FailureKind",
    "resolve_child_url",
]
