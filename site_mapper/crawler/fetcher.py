"""
Fetcher module: single-attempt HTTP GET with a per-page timeout.

Failures are returned as :class:`FetchFailure` values instead of being raised,
so the traversal can turn each of them into one site map line.
"""
from __future__ import annotations

import asyncio
from typing import Tuple
from urllib.parse import urlsplit

from aiohttp import ClientConnectorDNSError, ClientError, ClientSession, ClientTimeout, InvalidURL

from site_mapper.crawler.models import FailureKind, FetchFailure, FetchResult, PageData
from site_mapper.logger import logger

USER_AGENT = "web-crawler_1.0"
HTTP_ERROR_MESSAGE = "HTTP error fetching URL"

_SCHEMES: Tuple[str, ...] = ("http", "https")
_XML_TYPES: Tuple[str, ...] = ("application/xml", "application/xhtml+xml")


def is_fetchable_url(address: str) -> bool:
    """Return True if *address* is an absolute http(s) URL with a valid host and port."""
    try:
        parts = urlsplit(address)
        parts.port  # raises on a non-numeric port
    except ValueError:
        return False
    return parts.scheme in _SCHEMES and bool(parts.hostname)


def _is_markup(mime: str) -> bool:
    return not mime or mime.startswith("text/") or mime in _XML_TYPES or mime.endswith("+xml")


class Fetcher:
    """Fetches pages through a shared :class:`ClientSession`."""

    def __init__(self, session: ClientSession, timeout: float) -> None:
        self.session = session
        self._timeout = ClientTimeout(total=timeout)

    @classmethod
    def open_session(cls, user_agent: str = USER_AGENT) -> ClientSession:
        """Build a session that sends *user_agent* and never raises on status."""
        return ClientSession(headers={"User-Agent": user_agent}, raise_for_status=False)

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch *url* once.

        Returns PageData on a 2xx markup response, FetchFailure otherwise.
        """
        if not is_fetchable_url(url):
            return FetchFailure(FailureKind.MALFORMED_URL, f"Malformed URL: {url}")

        try:
            async with self.session.get(url, timeout=self._timeout) as resp:
                if not 200 <= resp.status < 300:
                    logger.debug("%s -> HTTP %s", url, resp.status)
                    return FetchFailure(FailureKind.HTTP_ERROR, HTTP_ERROR_MESSAGE, resp.status)
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if not _is_markup(mime):
                    return FetchFailure(FailureKind.OTHER, f"Unhandled content type: {mime}", resp.status)
                text = await resp.text(errors="replace")
                return PageData(url, text)
        except InvalidURL as exc:
            return FetchFailure(FailureKind.MALFORMED_URL, str(exc))
        except ClientConnectorDNSError as exc:
            return FetchFailure(FailureKind.UNKNOWN_HOST, str(exc))
        except asyncio.TimeoutError:
            return FetchFailure(FailureKind.TIMEOUT, "Read timed out")
        except ClientError as exc:
            detail = str(exc)
            message = f"{type(exc).__name__}: {detail}" if detail else type(exc).__name__
            return FetchFailure(FailureKind.OTHER, message)
