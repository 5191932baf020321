# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Dict, List, Union

import pytest
from aiohttp import web

from site_mapper.crawler.models import FailureKind, FetchFailure, FetchResult, PageData
from site_mapper.logger import init_logging

Response = Union[str, FetchFailure]


@pytest.fixture(autouse=True)
def reset_logging():
    """Rebind the project logger to the current stdout after each test."""
    yield
    init_logging()


class FakeFetcher:
    """In-memory fetcher: maps addresses to HTML bodies or failures.

    Unknown addresses answer with a 404-style failure. Every requested
    address is recorded in ``calls``.
    """

    def __init__(self, pages: Dict[str, Response]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        response = self.pages.get(url)
        if response is None:
            return FetchFailure(FailureKind.HTTP_ERROR, "HTTP error fetching URL", 404)
        if isinstance(response, FetchFailure):
            return response
        return PageData(url, response)


@pytest.fixture()
def fake_fetcher_factory():
    """Return a callable building a FakeFetcher from a page mapping."""
    return FakeFetcher


@pytest.fixture()
def page_html() -> str:
    """A page with one link of every kind the extractor understands."""
    return (
        "<html><head>"
        '<link rel="stylesheet" type="text/css" href="/static/main.css" />'
        '<script type="text/javascript" src="/static/main.js"></script>'
        "</head><body>"
        '<a href="/child1"><img src="/static/logo.gif"></a>'
        '<a href="http://external.com">X</a>'
        "</body></html>"
    )


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield its base URL, clean up afterwards."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def serve_app():
    """Return the helper serving an aiohttp app: ``async for url in serve_app(app, port)``."""
    return _serve_app
