"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class WebUrl:
    """A discovered URL and whether it belongs to the site being crawled.

    Build instances with :meth:`crawlable` or :meth:`not_crawlable`.
    Two values are equal when their addresses are equal.
    """

    address: str
    is_crawlable: bool = field(compare=False)

    @classmethod
    def crawlable(cls, address: str) -> WebUrl:
        return cls(address, True)

    @classmethod
    def not_crawlable(cls, address: str) -> WebUrl:
        return cls(address, False)

    def __str__(self) -> str:
        return self.address


@dataclass(slots=True)
class PageData:
    """Holds the URL and decoded body of a fetched page."""

    url: str
    content: str


class FailureKind(str, Enum):
    UNKNOWN_HOST = "unknown_host"
    TIMEOUT = "timeout"
    MALFORMED_URL = "malformed_url"
    HTTP_ERROR = "http_error"
    OTHER = "other"


@dataclass(slots=True)
class FetchFailure:
    """Why a page could not be fetched."""

    kind: FailureKind
    message: str = ""
    status: Optional[int] = None

    def describe(self, address: str) -> str:
        """Render the one-line site map diagnostic for *address*."""
        if self.kind is FailureKind.UNKNOWN_HOST:
            return f"{address} - unknown host."
        if self.kind is FailureKind.TIMEOUT:
            return f"{address} - read timeout."
        if self.kind is FailureKind.MALFORMED_URL:
            return f"{address} - not a valid url."
        return f"{address} - {self.message}"


FetchResult = Union[PageData, FetchFailure]
